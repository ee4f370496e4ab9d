from flask import Blueprint

login = Blueprint('login', __name__)

from oauth1_login.login import views, core
