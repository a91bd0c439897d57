"""Unit tests for the command line entry point."""

import json
import logging

from main import main


class TestMain:
    """Tests for main."""

    def test_prints_effective_properties(self, capsys, monkeypatch):
        """Test the JSON output with command line and environment values."""
        monkeypatch.setenv("CASSANDRA_KEYSPACE_NAME", "inventory")

        exit_code = main(["--cassandra.port=9043", "--cassandra.password=s3cret"])

        assert exit_code == 0
        output = json.loads(capsys.readouterr().out)
        assert output["port"] == 9043
        assert output["keyspace_name"] == "inventory"
        assert output["contact_points"] == "localhost"
        assert output["compression"] == "NONE"
        assert output["password"] != "s3cret"

    def test_invalid_configuration(self, capsys):
        """Test the exit code for values that cannot be bound."""
        exit_code = main(["--cassandra.port=abc"])

        assert exit_code == 2
        assert capsys.readouterr().out == ""

    def test_binding_error_logged_once(self, caplog):
        """Test that a binding failure is reported at error level only once."""
        with caplog.at_level(logging.DEBUG):
            main(["--cassandra.fetchSize=lots"])

        errors = [record for record in caplog.records if record.levelno >= logging.ERROR]
        assert len(errors) == 1
        assert errors[0].name == "main"
