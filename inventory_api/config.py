import os


def _env_flag(name, default=False):
    v = os.getenv(name)
    if v is None:
        return default
    return v.strip().lower() in {"1", "true", "yes", "y", "on"}


class Config:
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA")
    # seconds a statement waits on a locked SQLite database before failing
    STORE_TIMEOUT = float(os.getenv("STORE_TIMEOUT", "5"))

    @staticmethod
    def init_app(app):
        if not app.config.get("SQLALCHEMY_DATABASE_URI"):
            if os.getenv("DATABASE_URL"):
                app.config["SQLALCHEMY_DATABASE_URI"] = os.getenv("DATABASE_URL")
            else:
                os.makedirs(app.instance_path, exist_ok=True)
                db_path = os.path.join(app.instance_path, "inventory.db")
                app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

        if app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
            options = dict(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
            connect_args = dict(options.get("connect_args") or {})
            connect_args.setdefault("timeout", app.config["STORE_TIMEOUT"])
            options["connect_args"] = connect_args
            app.config["SQLALCHEMY_ENGINE_OPTIONS"] = options
