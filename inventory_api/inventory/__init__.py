from flask import Blueprint

bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")

from . import routes  # noqa: E402,F401
