"""Tests for the dbml-ddl command line."""

import json

import pytest

from dbml_ddl.cli import load_schema, main
from dbml_ddl.config import DDLConfig, set_config


USERS_DBML = "Table users {\n  id: int [pk, notNull],\n  name: varchar [unique]\n}\n"

USERS_SQL = (
    "CREATE TABLE users (\n"
    "  id int NOT NULL PRIMARY KEY,\n"
    "  name varchar UNIQUE\n"
    ");\n"
)


@pytest.fixture(autouse=True)
def lenient_config():
    set_config(DDLConfig())
    yield
    set_config(None)


@pytest.fixture
def dbml_file(tmp_path):
    path = tmp_path / "schema.dbml"
    path.write_text(USERS_DBML, encoding="utf-8")
    return path


class TestCompileCommand:

    def test_stdout(self, dbml_file, capsys):
        assert main(["compile", str(dbml_file)]) == 0
        assert capsys.readouterr().out == USERS_SQL

    def test_output_file(self, dbml_file, tmp_path):
        out = tmp_path / "schema.sql"
        assert main(["compile", str(dbml_file), "-o", str(out)]) == 0
        assert out.read_text(encoding="utf-8") == USERS_SQL

    def test_yaml_input(self, tmp_path, capsys):
        path = tmp_path / "schema.yaml"
        path.write_text("tables:\n  - name: t\n    columns:\n      - \"id:int\"\n", encoding="utf-8")
        assert main(["compile", str(path)]) == 0
        assert capsys.readouterr().out == "CREATE TABLE t (\n  id int\n);\n"

    def test_strict_failure(self, tmp_path, capsys):
        path = tmp_path / "bad.dbml"
        path.write_text("foo: int\n", encoding="utf-8")
        assert main(["compile", "--strict", str(path)]) == 1
        assert "line 1" in capsys.readouterr().err

    def test_lenient_success(self, tmp_path, capsys):
        path = tmp_path / "bad.dbml"
        path.write_text("foo: int\n", encoding="utf-8")
        assert main(["compile", str(path)]) == 0
        assert capsys.readouterr().out == "\n"

    def test_missing_file(self, tmp_path, capsys):
        assert main(["compile", str(tmp_path / "missing.dbml")]) == 1
        assert "dbml-ddl:" in capsys.readouterr().err


class TestInspectCommand:

    def test_json(self, dbml_file, capsys):
        assert main(["inspect", str(dbml_file)]) == 0
        data = json.loads(capsys.readouterr().out)
        assert [c["name"] for c in data["tables"][0]["columns"]] == ["id", "name"]

    def test_yaml(self, dbml_file, capsys):
        assert main(["inspect", str(dbml_file), "--format", "yaml"]) == 0
        assert "name: users" in capsys.readouterr().out


class TestLoadSchema:

    def test_dbml(self, dbml_file):
        schema = load_schema(str(dbml_file))
        assert schema.tables[0].name == "users"

    def test_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text('{"tables": [{"name": "t", "columns": ["id:int"]}]}', encoding="utf-8")
        schema = load_schema(str(path))
        assert schema.tables[0].columns[0].type == "int"

    def test_flow_style_yaml_without_extension(self, tmp_path):
        path = tmp_path / "schema"
        path.write_text("tables: [{name: t, columns: ['id:int']}]\n", encoding="utf-8")
        schema = load_schema(str(path))
        assert schema.tables[0].columns[0].name == "id"
