import logging
import os
import sys
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from .request import SanitizeRequest
import sanitizable
import flask.app


class Sanitize:
    """This class configures the Flask application to extract sanitized models from requests
    :param app: a Flask application.
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    # None means "not set": the environment is consulted, then the option is disabled
    LOGLEVEL = logging.WARNING
    # raise NotFoundError for any exception raised by Model.find (instead of GenericError)
    SANITIZE_COLLAPSE_LOOKUP_ERRORS = None
    # run Model.pre_validate on the merged document when patching
    SANITIZE_PATCH_PREVALIDATE = None

    def __init__(self, app: flask.app.Flask = None, *args, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        self.config = {}
        if app is not None:
            self.init_app(app, *args, **kwargs)

    def init_app(self, app: flask.app.Flask, app_db: SQLAlchemy = None, **kwargs) -> None:
        """
        Install the sanitizing request class, `kwargs` are app specific configuration options
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        if app_db is None:
            app_db = app.extensions.get("sqlalchemy", sanitizable.DB)
        sanitizable.DB = self.db = app_db

        app.request_class = SanitizeRequest

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        # per-app options, the Sanitize class attributes remain the defaults for all apps
        self.config = dict(kwargs)

        app.extensions["sanitizable"] = self

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stderr so we redirect eveything to sys.stderr
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# DB and logging initialization
#
DB = SQLAlchemy()

try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = Sanitize.init_logging(LOGLEVEL)
