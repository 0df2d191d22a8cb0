from unittest import TestCase, mock

from flask import Flask

from formrules.core_services.Validator import Validator
from formrules.core_services.validators import RuleRegistry
from formrules.service_container._ServiceContainer import ServiceContainer
from formrules.service_container._ServiceLoader import init_container
from formrules.utilities.PostedData import PostedData


class TestServiceContainer(TestCase):
    def test_singleton_is_built_once(self):
        container = ServiceContainer()
        factory = mock.Mock(side_effect=lambda: object())
        container.add("Thing", factory, singleton=True)

        assert container.get("Thing") is container.get("Thing")
        factory.assert_called_once()

    def test_service_is_built_per_lookup(self):
        container = ServiceContainer()
        container.add("Thing", object)
        assert container.get("Thing") is not container.get("Thing")

    def test_unknown_service_raises(self):
        with self.assertRaises(LookupError):
            ServiceContainer().get("Missing")


class TestServiceLoader(TestCase):
    def test_registry_receives_injected_database(self):
        app = Flask(__name__)
        database = mock.Mock()
        database.query.return_value = []
        init_container(app, database=database, strict=False)

        registry = app.container.get("RuleRegistry")
        assert isinstance(registry, RuleRegistry)
        assert registry.handler("unique")("x", "users.email") is True

        validator = app.container.get("Validator")
        assert isinstance(validator, Validator)
        assert validator.registry is registry

    def test_database_path_from_environment(self):
        app = Flask(__name__)
        with mock.patch.dict("os.environ", {"FORMRULES_DATABASE": "/tmp/formrules-test.db"}):
            init_container(app)
        assert app.container.get("Database").connection_string == "/tmp/formrules-test.db"


class TestPostedData(TestCase):
    def test_get_and_set(self):
        posted = PostedData({"name": "alice"})
        posted.set("age", "30")

        assert posted.get("name") == "alice"
        assert posted.get("missing") is None
        assert posted.get("missing", "x") == "x"
        assert "age" in posted
        assert posted == {"name": "alice", "age": "30"}

    def test_copy_of_initial_data(self):
        source = {"name": "alice"}
        posted = PostedData(source)
        posted.set("name", "bob")
        assert source == {"name": "alice"}
