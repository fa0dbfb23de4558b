import os

from flask import Flask, redirect, url_for

from tinydb import TinyDB
from tinydb.storages import MemoryStorage

from bulletproofs_routes import bulletproofs_bp, init_bulletproofs_bp


DEFAULT_DB_PATH = 'db.json'
DEFAULT_SECRET_KEY = "key"


def open_db(db_path=None):
    """TinyDB를 연다. ':memory:'이면 MemoryStorage를 사용한다."""
    db_path = db_path or os.environ.get("BULLETPROOFS_DB", DEFAULT_DB_PATH)
    if db_path == ":memory:":
        return TinyDB(storage=MemoryStorage)  # Memory DB
    return TinyDB(db_path)                    # Storage DB


def create_app(db_path=None):
    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY)

    db = open_db(db_path)
    init_bulletproofs_bp(db.table("bulletproofs"))
    app.register_blueprint(bulletproofs_bp)

    @app.route("/")
    def index():
        return redirect(url_for("bulletproofs.setup_page"))

    return app


if __name__ == "__main__":
    create_app().run(debug=True)
