"""
Development server

    python run.py

Configuration is chosen by FLASK_ENV (see config.py). In production serve
`run:app` from a WSGI server instead.
"""

import os
from app import create_app

app = create_app()

if __name__ == '__main__':
    host = os.getenv('FLASK_HOST', '0.0.0.0')
    port = int(os.getenv('PORT', os.getenv('FLASK_PORT', 5000)))

    app.logger.info(f"Serving on {host}:{port} (debug={app.config.get('DEBUG', False)})")
    app.run(
        debug=app.config.get('DEBUG', False),
        host=host,
        port=port
    )
