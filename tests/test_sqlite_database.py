import os
import tempfile
from pathlib import Path
from unittest import TestCase

from formrules.core_services.Sqlite3Database import Sqlite3Database
from formrules.core_services.Validator import Validator
from formrules.core_services.validators import RuleRegistry


class TestSqlite3Database(TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.database = Sqlite3Database(os.path.join(self.tmp.name, "app.db"))
        self.database.save("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT)")
        self.database.save("INSERT INTO users (email) VALUES (?)", ("taken@example.com",))

    def tearDown(self):
        self.tmp.cleanup()

    def test_query_returns_rows_as_dicts(self):
        rows = self.database.query("SELECT email FROM users WHERE email = ?", ("taken@example.com",))
        assert rows == [{"email": "taken@example.com"}]

    def test_query_log_is_not_repeated_by_parent_loggers(self):
        assert self.database.logger.propagate is False
        assert len(self.database.logger.handlers) == 1

    def test_unique_rule_against_sqlite(self):
        validator = Validator(RuleRegistry(database=self.database), strict=False)
        rules = {"email": ["required", "unique:users.email"]}

        taken = validator.validate({"email": "taken@example.com"}, rules)
        assert taken.errors == {"email": "Value is already exists in table 'users' for field 'email'"}

        free = validator.validate({"email": "free@example.com"}, rules)
        assert free.errors == {}
        assert free.validated == {"email": "free@example.com"}

    def test_value_is_bound_as_parameter(self):
        validator = Validator(RuleRegistry(database=self.database), strict=False)
        outcome = validator.validate({"email": "' OR '1'='1"}, {"email": ["unique:users.email"]})
        assert outcome.errors == {}

    def test_missing_table_error_propagates(self):
        import sqlite3

        validator = Validator(RuleRegistry(database=self.database), strict=False)
        with self.assertRaises(sqlite3.OperationalError):
            validator.validate({"email": "x"}, {"email": ["unique:accounts.email"]})
        assert Path(self.database.connection_string).exists()
