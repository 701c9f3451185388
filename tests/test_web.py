"""
Tests for the HTTP API.
"""

import json

from fastapi.testclient import TestClient

from csv2json.version import __version__
from csv2json.web.main import app

client = TestClient(app)


class TestServiceEndpoints:

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_version(self):
        assert client.get("/api/version").json() == {"version": __version__}

    def test_options(self):
        payload = client.get("/api/options").json()
        assert payload["defaults"]["delimiter"] == "comma"
        assert payload["defaults"]["null_values"] == ["", "null", "NULL", "N/A"]
        assert "auto" in payload["delimiters"]
        assert payload["output_formats"] == ["records", "array", "object"]


class TestConvertText:

    def test_defaults(self):
        response = client.post("/api/convert", json={"csv": "name,active,age\nJohn,yes,30"})
        assert response.status_code == 200
        payload = response.json()
        assert payload["success"] is True
        assert json.loads(payload["output"]) == [{"name": "John", "active": True, "age": 30}]
        assert payload["data"] is None
        assert payload["metadata"]["row_count"] == 1
        assert payload["metadata"]["data_types"] == {
            "name": "string",
            "active": "boolean",
            "age": "integer",
        }

    def test_include_data(self):
        response = client.post(
            "/api/convert?include_data=true",
            json={"csv": "a,b\n5,x", "config": {"output_format": "object"}},
        )
        assert response.status_code == 200
        assert response.json()["data"] == {"a": [5], "b": ["x"]}

    def test_strict_errors_in_metadata(self):
        response = client.post(
            "/api/convert",
            json={"csv": "a,b\nonly\np,q", "config": {"strict_mode": True}},
        )
        payload = response.json()
        assert payload["metadata"]["errors"] == [
            {"line": 2, "error": "Expected 2 columns, got 1", "column": None, "value": "only"}
        ]
        assert "1 rows had parsing errors" in payload["warnings"]

    def test_conversion_failure(self):
        response = client.post("/api/convert", json={"csv": "   "})
        assert response.status_code == 422
        assert response.json()["detail"] == "CSV input is required"

    def test_camel_case_options(self):
        response = client.post(
            "/api/convert",
            json={"csv": "5,x\n6,y", "config": {"hasHeaders": False, "customHeaders": "n,s"}},
        )
        assert response.status_code == 200, response.text
        assert json.loads(response.json()["output"]) == [{"n": 5, "s": "x"}, {"n": 6, "s": "y"}]

    def test_unknown_option_is_rejected(self):
        response = client.post(
            "/api/convert",
            json={"csv": "a\nb", "config": {"flattenArrays": True}},
        )
        assert response.status_code == 422

    def test_invalid_config_is_rejected(self):
        response = client.post(
            "/api/convert",
            json={"csv": "a\nb", "config": {"delimiter": "colon"}},
        )
        assert response.status_code == 422


class TestConvertFile:

    def test_upload(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", b"a;b\n5;x", "text/csv")},
            data={"config_json": json.dumps({"delimiter": "semicolon"})},
        )
        assert response.status_code == 200, response.text
        assert json.loads(response.json()["output"]) == [{"a": 5, "b": "x"}]

    def test_upload_with_encoding(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", "name\nJosé".encode("latin-1"), "text/csv")},
            data={"encoding": "latin-1"},
        )
        assert response.status_code == 200, response.text
        assert json.loads(response.json()["output"]) == [{"name": "José"}]

    def test_bad_config_json(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", b"a\nb", "text/csv")},
            data={"config_json": "{not json"},
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid configuration")

    def test_upload_with_camel_case_config(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", b"a|b\n5|x", "text/csv")},
            data={"config_json": json.dumps({"delimiter": "pipe", "outputFormat": "object"})},
        )
        assert response.status_code == 200, response.text
        assert json.loads(response.json()["output"]) == {"a": [5], "b": ["x"]}

    def test_upload_with_unknown_option(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", b"a\nb", "text/csv")},
            data={"config_json": json.dumps({"bogus": 1})},
        )
        assert response.status_code == 400

    def test_undecodable_upload(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", b"name\n\xff\xfe", "text/csv")},
        )
        assert response.status_code == 400

    def test_unknown_encoding(self):
        response = client.post(
            "/api/convert/file",
            files={"file": ("data.csv", b"a\nb", "text/csv")},
            data={"encoding": "klingon"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Unknown encoding: klingon"
