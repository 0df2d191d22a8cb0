from flask import session

ERRORS_KEY = 'errors'
FORM_DATA_KEY = 'form_data'


class FormHandler:
    """Keeps failed submissions in the session so the form can be shown again."""

    def __init__(self, session_store=None):
        self.session = session_store if session_store is not None else session

    def persist(self, errors: dict, form_data: dict):
        self.session[ERRORS_KEY] = errors
        self.session[FORM_DATA_KEY] = form_data

    def restore(self, default_data=None) -> tuple[dict, dict]:
        """
        Pop the stored submission and its errors from the session.
        """
        form_data = self.session.pop(FORM_DATA_KEY, None) or default_data or {}
        errors = self.session.pop(ERRORS_KEY, None) or {}
        return form_data, errors

    def clear(self):
        self.session.pop(ERRORS_KEY, None)
        self.session.pop(FORM_DATA_KEY, None)

    def old(self, key: str, default=None):
        return (self.session.get(FORM_DATA_KEY) or {}).get(key, default)

    def errors(self) -> dict:
        return self.session.get(ERRORS_KEY) or {}

    def error(self, field: str, default=None):
        return self.errors().get(field, default)
