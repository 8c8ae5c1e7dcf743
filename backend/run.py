from piste import create_app, socketio

app = create_app()
 
if __name__ == '__main__':
    # Use SocketIO server so the bout clock and live renders work in dev
    socketio.run(app, debug=True)
