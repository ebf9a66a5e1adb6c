"""
Development server for the readings API.

Storage and database come from the environment (BP_STORAGE, BP_DATA_FILE,
DATABASE_URL); see bp_tracker.create_app.
"""
import os
from bp_tracker import create_app

app = create_app()

if __name__ == '__main__':
    app.run(
        host=os.getenv('FLASK_HOST', '127.0.0.1'),
        port=int(os.getenv('FLASK_PORT', 3000)),
        debug=os.getenv('FLASK_ENV') != 'production',
    )
