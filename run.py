import os

from Tradelog_app import create_app
from Tradelog_app.extensions import db
from Tradelog_app.models import User, Trade

app = create_app()

# objects preloaded in `flask --app run shell`
@app.shell_context_processor
def make_shell_context():
    return {
        'db': db,
        'User': User,
        'Trade': Trade
    }

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=int(os.environ.get('PORT', 8000)))
