"""Tests for the resource format recognizers and parsers."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import fields
from pathlib import Path

import pytest
import yaml

from resource_selector.formats import (
    HclFormat,
    JsonFormat,
    ParseContext,
    PropertiesFormat,
    ProtoFormat,
    XmlFormat,
    YamlFormat,
)
from resource_selector.formats.declarative import parse_hcl, parse_proto
from resource_selector.formats.properties import parse_properties


@pytest.mark.parametrize(
    ("fmt", "accepted", "rejected"),
    [
        (JsonFormat(), ["a.json", "A.JSON"], ["a.jsonl", "a.yaml"]),
        (XmlFormat(), ["pom.xml", "schema.xsd", "style.xslt"], ["a.html", "xml"]),
        (YamlFormat(), ["a.yml", "b.yaml"], ["a.yamlx"]),
        (PropertiesFormat(), ["application.properties"], ["a.props"]),
        (ProtoFormat(), ["person.proto"], ["person.protobuf"]),
        (HclFormat(), ["main.tf", "prod.tfvars", "app.hcl"], ["main.tfstate"]),
    ],
)
def test_accepts_by_file_name(fmt, accepted: list[str], rejected: list[str]):
    for name in accepted:
        assert fmt.accepts(Path("some/dir") / name), name
    for name in rejected:
        assert not fmt.accepts(Path("some/dir") / name), name


def test_parse_batch_keeps_order_and_relative_source_paths(tmp_path: Path):
    (tmp_path / "conf").mkdir()
    a = tmp_path / "conf" / "a.json"
    a.write_text('{"a": 1}')
    b = tmp_path / "b.json"
    b.write_text("[1, 2]")

    documents = JsonFormat().parse([a, b], tmp_path, ParseContext())
    assert [doc.path for doc in documents] == [a, b]
    assert [doc.source_path for doc in documents] == [Path("conf/a.json"), Path("b.json")]
    assert [doc.content for doc in documents] == [{"a": 1}, [1, 2]]
    assert {doc.format for doc in documents} == {"json"}


def test_parse_empty_batch(tmp_path: Path):
    assert YamlFormat().parse([], tmp_path, ParseContext()) == []


def test_parse_uses_context_encoding(tmp_path: Path):
    f = tmp_path / "latin.properties"
    f.write_bytes("name=caf\xe9\n".encode("latin-1"))
    documents = PropertiesFormat().parse([f], tmp_path, ParseContext(encoding="latin-1"))
    assert documents[0].content == {"name": "caf\xe9"}


def test_parse_context_carries_only_the_encoding():
    assert [f.name for f in fields(ParseContext)] == ["encoding"]
    assert ParseContext().encoding == "utf-8"


def test_yaml_multiple_documents():
    assert YamlFormat().parse_text("a: 1\n---\nb: 2\n") == [{"a": 1}, {"b": 2}]


def test_xml_root_element():
    root = XmlFormat().parse_text('<?xml version="1.0"?><beans><bean id="x"/></beans>')
    assert root.tag == "beans"
    assert root.find("bean").get("id") == "x"


def test_parser_errors_propagate(tmp_path: Path):
    bad_yaml = tmp_path / "bad.yaml"
    bad_yaml.write_text("a: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        YamlFormat().parse([bad_yaml], tmp_path, ParseContext())

    bad_xml = tmp_path / "bad.xml"
    bad_xml.write_text("<open>")
    with pytest.raises(ET.ParseError):
        XmlFormat().parse([bad_xml], tmp_path, ParseContext())


def test_properties_separators_and_comments():
    text = (
        "# comment\n"
        "! also a comment\n"
        "\n"
        "a=1\n"
        "b = 2\n"
        "c:3\n"
        "d 4\n"
        "e\n"
        "f==6\n"
        "  g = spaced value  \n"
    )
    assert parse_properties(text) == {
        "a": "1",
        "b": "2",
        "c": "3",
        "d": "4",
        "e": "",
        "f": "=6",
        "g": "spaced value  ",
    }


def test_properties_continuation_lines():
    text = "fruits = apple, \\\n         banana, \\\n         pear\nnext=1\n"
    assert parse_properties(text) == {"fruits": "apple, banana, pear", "next": "1"}


def test_properties_escapes():
    text = "key\\ with\\ spaces=tab\\there\nunicode=\\u00e9t\\u00e9\npath=C:\\\\temp\n"
    assert parse_properties(text) == {
        "key with spaces": "tab\there",
        "unicode": "\xe9t\xe9",
        "path": "C:\\temp",
    }


def test_properties_later_keys_win():
    assert parse_properties("a=1\na=2\n") == {"a": "2"}


def test_proto_declarations():
    schema = parse_proto(
        'syntax = "proto3";\n'
        "package acme.people.v1;\n"
        'import "google/protobuf/timestamp.proto";\n'
        "// message Commented {}\n"
        "message Person {\n"
        "  message Address {}\n"
        "}\n"
        "enum Kind { KIND_UNSPECIFIED = 0; }\n"
        "service People {}\n"
    )
    assert schema.syntax == "proto3"
    assert schema.package == "acme.people.v1"
    assert schema.imports == ["google/protobuf/timestamp.proto"]
    assert schema.declarations == [
        ("message", "Person"),
        ("message", "Address"),
        ("enum", "Kind"),
        ("service", "People"),
    ]


def test_hcl_top_level_blocks():
    config = parse_hcl(
        "# comment\n"
        'terraform {\n  required_version = ">= 1.5"\n}\n'
        'provider "aws" {\n  region = "us-east-1"\n}\n'
        'resource "aws_s3_bucket" "logs" {\n  tags = {\n    team = "infra"\n  }\n}\n'
        "variable region {}\n"
    )
    assert config.blocks == [
        ("terraform", []),
        ("provider", ["aws"]),
        ("resource", ["aws_s3_bucket", "logs"]),
        ("variable", ["region"]),
    ]
