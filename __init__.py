import logging
import os

import click
import markupsafe
from dotenv import load_dotenv
from flask import Flask

from formrules.core_services.ErrorHandler import ErrorHandler
from formrules.core_services.FormHandler import FormHandler
from formrules.core_services.Request import Request
from formrules.core_services.Validator import ValidationOutcome, Validator
from formrules.core_services.validators import ConfigurationError, RuleDefinition, RuleRegistry
from formrules.service_container._Injector import injector, injectable_route
from formrules.service_container._ServiceLoader import init_container

__all__ = [
    "ConfigurationError",
    "FormRules",
    "Request",
    "RuleDefinition",
    "RuleRegistry",
    "ValidationOutcome",
    "Validator",
    "injectable_route",
    "injector",
]


def FormRules(app: Flask, database=None, debug=False, **kwargs):
    """Wire request validation into a Flask application.

    Loads ``.env``, sets the session secret, registers the validation services
    on ``app.container`` and installs the error handler, the template helpers
    for re-displaying a failed form and the ``flask rules`` command.
    """
    load_dotenv()
    if os.getenv('APP_SECRET_KEY'):
        app.secret_key = os.getenv('APP_SECRET_KEY')

    debug = debug or os.getenv("FORMRULES_DEBUG", "false").lower() == "true"
    error_handler = ErrorHandler(
        name="formrules",
        log_to_file=kwargs.get("log_file"),
        log_level=logging.DEBUG if debug else logging.INFO,
    )
    error_handler.register(app)
    app.error_handler = error_handler

    init_container(app, database=database, strict=kwargs.get("strict"))

    @app.template_global("old")
    def old(key, default=""):
        return FormHandler().old(key, default)

    @app.template_global("error_for")
    def error_for(field):
        message = FormHandler().error(field)
        if not message:
            return ""
        return markupsafe.Markup('<span class="invalid-feedback">{}</span>').format(message)

    @app.cli.command("rules")
    def rules():
        """List the registered validation rules."""
        registry = app.container.get("RuleRegistry")
        for name in registry.list_names():
            click.echo(name)

    return app
