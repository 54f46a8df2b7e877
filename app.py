# Main Flask app
import logging

from flask import Flask

from config import config
from errors import register_error_handlers
from models import db, bcrypt
from routes import auth_bp, posts_bp, users_bp, main_bp
from services import init_services


def create_app(config_name='default', **overrides):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.config.update(overrides)

    logging.basicConfig(format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    logging.getLogger().setLevel(app.config['LOG_LEVEL'])
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    bcrypt.init_app(app)
    init_services(app)
    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    # Register blueprints
    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(posts_bp)
    app.register_blueprint(users_bp)

    return app


if __name__ == '__main__':
    create_app().run()
