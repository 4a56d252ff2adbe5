import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Live boards kept in memory; the oldest is evicted past this cap
    MAX_BOARDS = int(os.environ.get('MAX_BOARDS', '100'))
    # Comma-separated list of frontend origins allowed by CORS / Socket.IO
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
        ).split(',') if o.strip()
    ]
    # Delay (seconds) before the deferred name-input focus event is emitted. 0 yields once.
    FOCUS_DELAY_SEC = float(os.environ.get('FOCUS_DELAY_SEC', '0'))
