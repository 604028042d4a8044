"""
WSGI entry point for the form builder API
gunicorn --worker-class eventlet -w 1 wsgi:app
"""
import os
from app import create_app
from app.extensions import socketio

app = create_app()

if __name__ == '__main__':
    socketio.run(
        app,
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', 5000)),
        debug=app.config.get('DEBUG', False),
        use_reloader=False,
        allow_unsafe_werkzeug=True
    )
