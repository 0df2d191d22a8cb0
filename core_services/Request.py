from typing import Any

from flask import abort, request, session

from formrules.core_services.FormHandler import FormHandler
from formrules.core_services.Response import Response
from formrules.core_services.Validator import ValidationOutcome, Validator
from formrules.utilities.PostedData import PostedData


class Request:
    """Posted data, headers and validation for the current Flask request."""

    def __init__(self, validator: Validator = None, session_store=None):
        self.validator = validator or Validator()
        self.form_handler = FormHandler(session_store if session_store is not None else session)

    @property
    def request(self):
        return request

    def __get_json(self) -> dict:
        if self.request.is_json:
            data = self.request.get_json(silent=True)
            return data if isinstance(data, dict) else {}
        return {}

    def posted(self) -> PostedData:
        """Body fields: decoded JSON for ``application/json`` requests, the form body otherwise."""
        if self.request.is_json:
            return PostedData(self.__get_json())
        return PostedData(self.request.form.to_dict())

    def input(self, key: str = None, default=None) -> Any:
        if key is None:
            return self.posted().to_dict()
        return self.posted().get(key, default)

    def all(self) -> dict:
        return {
            **self.request.args.to_dict(),
            **self.posted().to_dict(),
        }

    def path(self) -> str:
        return self.request.path

    @property
    def method(self) -> str:
        return self.request.method

    def is_method(self, method: str) -> bool:
        return self.request.method == method

    def headers(self, key: str = None, default=None) -> dict | str:
        if key:
            header = self.request.headers.get(key)
            return header if header else default
        return {key: value for key, value in self.request.headers}

    def referrer(self) -> str:
        return self.headers("Referer") or self.request.path

    def validate(self, rules: dict[str, list[str]], messages: dict[str, str] = None) -> ValidationOutcome:
        """
        Validate the posted data against ``rules``.

        When any field fails, the errors and the submitted data are stored in the
        session under ``errors`` and ``form_data`` and the request is aborted with
        a 303 redirect back to the referring page. A successful submission clears
        whatever an earlier failure left there.
        """
        posted = self.posted()
        outcome = self.validator.validate(posted, rules, messages or {})
        if outcome.failed:
            self.form_handler.persist(outcome.errors, posted.to_dict())
            abort(Response.redirect_back(self.referrer()))
        self.form_handler.clear()
        return outcome

    def old(self, key: str, default=None) -> Any:
        return self.form_handler.old(key, default)

    def errors(self) -> dict:
        return self.form_handler.errors()
