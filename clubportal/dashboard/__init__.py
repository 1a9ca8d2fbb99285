from flask import Blueprint # type: ignore

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/dashboard')

from . import routes  # noqa: E402,F401
