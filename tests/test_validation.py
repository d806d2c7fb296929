import pytest
from pydantic import ValidationError

from docsearch.core.errors import ValidationFailed
from docsearch.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, validate_document_input
)


def test_valid_create_defaults():
    data = DocumentCreate(title="Q1 Notes", content="Revenue up")
    assert data.category == "General"
    assert data.tags == []


@pytest.mark.parametrize(
    "payload, message, field",
    [
        ({"content": "x"}, "Title is required", "title"),
        ({"title": "t" * 201, "content": "x"}, "Title must be less than 200 characters", "title"),
        ({"title": "ok"}, "Content is required", "content"),
        ({"title": "ok", "content": "x", "category": ""}, "Category is required", "category"),
        (
            {"title": "ok", "content": "x", "category": "c" * 51},
            "Category must be less than 50 characters",
            "category",
        ),
    ],
)
def test_first_violated_rule_is_reported(payload, message, field):
    with pytest.raises(ValidationFailed) as exc_info:
        validate_document_input(DocumentCreate, payload)
    assert exc_info.value.message == message
    assert exc_info.value.field == field


def test_only_first_rule_is_reported_when_several_fail():
    with pytest.raises(ValidationFailed) as exc_info:
        validate_document_input(DocumentCreate, {"title": "", "content": "", "category": ""})
    assert exc_info.value.message == "Title is required"


def test_length_limits_are_inclusive():
    data = validate_document_input(
        DocumentCreate, {"title": "t" * 200, "content": "x", "category": "c" * 50}
    )
    assert len(data.title) == 200
    assert len(data.category) == 50


def test_create_normalizes_tags():
    data = DocumentCreate(title="t", content="c", tags=["work", " work ", "", "home"])
    assert data.tags == ["work", "home"]


def test_update_validates_only_provided_fields():
    update = DocumentUpdate(title="New title")
    assert update.changes() == {"title": "New title"}

    with pytest.raises(ValidationError):
        DocumentUpdate(content="")

    with pytest.raises(ValidationFailed) as exc_info:
        validate_document_input(DocumentUpdate, {"category": "c" * 51})
    assert exc_info.value.field == "category"


def test_update_ignores_explicit_none():
    assert DocumentUpdate(title=None, content="body").changes() == {"content": "body"}


def test_whitespace_only_values_are_not_empty():
    data = validate_document_input(
        DocumentCreate, {"title": "   ", "content": " ", "category": "\t"}
    )
    assert (data.title, data.content, data.category) == ("   ", " ", "\t")

    update = validate_document_input(DocumentUpdate, {"title": "  "})
    assert update.changes() == {"title": "  "}
