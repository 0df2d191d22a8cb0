import os

from formrules.core_services.FormHandler import FormHandler
from formrules.core_services.Request import Request
from formrules.core_services.Response import Response
from formrules.core_services.Sqlite3Database import Sqlite3Database
from formrules.core_services.Validator import Validator
from formrules.core_services.validators import RuleRegistry
from formrules.service_container._ServiceContainer import ServiceContainer


def init_container(app, database=None, strict=None):
    """
    Register the validation services on ``app.container``.

    The data store comes from ``database`` or, when omitted, from the
    ``FORMRULES_DATABASE`` SQLite path. Without either, rules that need a data
    store (``unique``) are registered without a handler.
    """
    container = ServiceContainer()

    if database is None and os.getenv("FORMRULES_DATABASE"):
        database = Sqlite3Database(os.getenv("FORMRULES_DATABASE"))

    container.add("Database", lambda: database, singleton=True)
    container.add("RuleRegistry", lambda: RuleRegistry(database=container.get("Database")), singleton=True)
    container.add("Validator", lambda: Validator(container.get("RuleRegistry"), strict=strict), singleton=True)
    container.add("Request", lambda: Request(container.get("Validator")))
    container.add("FormHandler", FormHandler)
    container.add("Response", Response)

    app.container = container
    return app
