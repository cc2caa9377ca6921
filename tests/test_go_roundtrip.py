"""Compile the generated code and exercise it with ``go test``."""

import os
import shutil
import subprocess

import pytest

from schema_generate.codegen import generate_code
from schema_generate.codegen.languages.go import GoGenerator
from schema_generate.loader import model_from_dict

pytestmark = pytest.mark.skipif(shutil.which("go") is None, reason="Go toolchain not found")

MODEL = {
    "records": {
        "Person": {
            "description": "a person",
            "additional_type": "false",
            "fields": {
                "Name": {"json_name": "name", "type": "string", "required": True},
                "Age": {"json_name": "age", "type": "int", "omit_empty": True},
            },
        },
        "Thing": {
            "additional_type": "int",
            "fields": {
                "Id": {"json_name": "id", "type": "*string", "required": True},
                "Tags": {"json_name": "tags", "type": "[]string", "omit_empty": True},
                "Meta": {"json_name": "meta", "type": "map[string]string", "omit_empty": True},
            },
        },
        "Counter": {
            "fields": {
                "Count": {"json_name": "count", "marshal_type": "int", "unmarshal_type": "string"},
                "Label": {"json_name": "label", "marshal_type": "string", "unmarshal_type": "int64"},
                "Secret": {"marshal_name": "-", "unmarshal_name": "secret", "type": "string"},
            },
        },
        "Doc": {
            "fields": {
                "Name": {"json_name": "name", "type": "string"},
                "Extra": {"json_name": "extra", "type": "interface{}", "omit_empty": True},
                "Value": {"json_name": "value", "type": "any", "omit_empty": True},
                "Cells": {"json_name": "cells", "type": "[3]int", "omit_empty": True},
            },
        },
    },
    "aliases": {"PersonID": {"type": "string"}},
}

GO_TEST = r'''package models

import (
	"encoding/json"
	"strings"
	"testing"
)

func TestPersonOmitsZeroAge(t *testing.T) {
	b, err := Person{Name: "Ann"}.MarshalJSON()
	if err != nil {
		t.Fatal(err)
	}
	if string(b) != `{"name": "Ann"}` {
		t.Fatalf("unexpected output %s", b)
	}
	b, _ = Person{Name: "Ann", Age: 3}.MarshalJSON()
	if string(b) != `{"age": 3, "name": "Ann"}` {
		t.Fatalf("unexpected output %s", b)
	}
}

func TestPersonUnmarshal(t *testing.T) {
	var p Person
	if err := json.Unmarshal([]byte(`{"name":"Ann","age":5,"extra":true}`), &p); err != nil {
		t.Fatal(err)
	}
	if p.Name != "Ann" || p.Age != 5 {
		t.Fatalf("unexpected value %+v", p)
	}
}

func TestPersonRequired(t *testing.T) {
	var p Person
	err := json.Unmarshal([]byte(`{"age":5}`), &p)
	if err == nil || !strings.Contains(err.Error(), "name") {
		t.Fatalf("expected required-field error, got %v", err)
	}
	err = json.Unmarshal([]byte(`{"name":null}`), &p)
	if err == nil {
		t.Fatal("null must not satisfy a required field")
	}
}

func TestMalformedInput(t *testing.T) {
	var p Person
	if err := p.UnmarshalJSON([]byte(`[1, 2]`)); err == nil {
		t.Fatal("expected parse error")
	}
}

func TestThingRequiredPointer(t *testing.T) {
	_, err := Thing{}.MarshalJSON()
	if err == nil || !strings.Contains(err.Error(), "id") {
		t.Fatalf("expected required-field error, got %v", err)
	}
}

func TestThingAdditionalProperties(t *testing.T) {
	var th Thing
	if err := json.Unmarshal([]byte(`{"id":"x","b":2,"a":1}`), &th); err != nil {
		t.Fatal(err)
	}
	if *th.Id != "x" || th.AdditionalProperties["a"] != 1 || th.AdditionalProperties["b"] != 2 {
		t.Fatalf("unexpected value %+v", th)
	}
	if _, ok := th.ToMap()["a"]; ok {
		t.Fatal("additional properties must not appear in ToMap")
	}
	b, err := th.MarshalJSON()
	if err != nil {
		t.Fatal(err)
	}
	if string(b) != `{"id": "x", "a": 1, "b": 2}` {
		t.Fatalf("unexpected output %s", b)
	}
	var back Thing
	if err := json.Unmarshal(b, &back); err != nil {
		t.Fatal(err)
	}
	if *back.Id != "x" || len(back.AdditionalProperties) != 2 {
		t.Fatalf("round trip lost data: %+v", back)
	}
	if err := json.Unmarshal([]byte(`{"id":"x","a":"nope"}`), &th); err == nil {
		t.Fatal("expected additional-property decode error")
	}
}

func TestThingOmitEmptyAggregates(t *testing.T) {
	id := "x"
	b, _ := Thing{Id: &id}.MarshalJSON()
	if string(b) != `{"id": "x"}` {
		t.Fatalf("unexpected output %s", b)
	}
	b, _ = Thing{Id: &id, Tags: []string{"t"}, Meta: map[string]string{"k": "v"}}.MarshalJSON()
	if string(b) != `{"id": "x", "meta": {"k":"v"}, "tags": ["t"]}` {
		t.Fatalf("unexpected output %s", b)
	}
}

func TestCounterCoercion(t *testing.T) {
	var c Counter
	if err := json.Unmarshal([]byte(`{"count":"42","label":7,"secret":"s"}`), &c); err != nil {
		t.Fatal(err)
	}
	if c.Count != 42 || c.Label != "7" || c.Secret != "s" {
		t.Fatalf("unexpected value %+v", c)
	}
	if err := json.Unmarshal([]byte(`{"count":"forty"}`), &c); err == nil {
		t.Fatal("expected parse error")
	}
	m := c.ToMap()
	if _, ok := m["secret"]; ok {
		t.Fatal("write-excluded field must not be projected")
	}
}

func TestDocOmitsNilInterfaces(t *testing.T) {
	b, err := Doc{Name: "x"}.MarshalJSON()
	if err != nil {
		t.Fatal(err)
	}
	if string(b) != `{"name": "x"}` {
		t.Fatalf("unexpected output %s", b)
	}
	b, err = Doc{Name: "x", Extra: 1, Value: "v", Cells: [3]int{1, 2, 3}}.MarshalJSON()
	if err != nil {
		t.Fatal(err)
	}
	if string(b) != `{"cells": [1,2,3], "extra": 1, "name": "x", "value": "v"}` {
		t.Fatalf("unexpected output %s", b)
	}
}

func TestDocUnmarshalFixedArray(t *testing.T) {
	var d Doc
	if err := json.Unmarshal([]byte(`{"name":"x","cells":[4,5,6],"extra":{"k":1}}`), &d); err != nil {
		t.Fatal(err)
	}
	if d.Cells != [3]int{4, 5, 6} || d.Value != nil {
		t.Fatalf("unexpected value %+v", d)
	}
	if _, ok := d.Extra.(map[string]interface{}); !ok {
		t.Fatalf("unexpected extra %#v", d.Extra)
	}
}
'''


def test_generated_code_compiles_and_behaves(tmp_path):
    result = generate_code(GoGenerator({"package_name": "models"}), model_from_dict(MODEL))
    assert result.success, result.error_message

    (tmp_path / "go.mod").write_text("module example.com/models\n\ngo 1.18\n")
    (tmp_path / "models.go").write_text(result.code)
    (tmp_path / "models_test.go").write_text(GO_TEST)

    completed = subprocess.run(
        ["go", "test", "./..."],
        cwd=tmp_path,
        env={**os.environ, "GOFLAGS": "-mod=mod"},
        capture_output=True,
        text=True,
        timeout=300,
    )
    assert completed.returncode == 0, completed.stdout + completed.stderr
