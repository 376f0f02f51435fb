import os

BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def _env_flag(name, default='0'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3000'))
    # Seconds a connection may hold a slot before it is timed out (10 minutes)
    INACTIVITY_TIMEOUT_SEC = float(os.environ.get('INACTIVITY_TIMEOUT_SEC', '600'))
    # When enabled, every accepted inbound event pushes the deadline back
    RESET_TIMEOUT_ON_ACTIVITY = _env_flag('RESET_TIMEOUT_ON_ACTIVITY')
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',')
        if origin.strip()
    ]
    # Browser client bundle served at the URL root
    STATIC_FOLDER = os.environ.get('STATIC_FOLDER') or os.path.join(BACKEND_DIR, 'public')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
