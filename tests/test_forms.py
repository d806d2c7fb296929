import pytest

from docsearch.core.errors import RemoteFailure
from docsearch.domains.documents.forms import (
    CONFIRM_DELETE_MESSAGE, CREATED_MESSAGE, CREATE_FAILED_MESSAGE, DELETED_MESSAGE,
    PENDING_MESSAGE, UPDATED_MESSAGE, UPDATE_FAILED_MESSAGE, DocumentEditor, DocumentForm
)


def test_new_form_defaults():
    form = DocumentForm()
    assert form.category == "General"
    assert form.tags.to_list() == []
    assert not form.is_pending


def test_add_tag_clears_input_only_when_added():
    form = DocumentForm()
    form.tag_input = " work "
    assert form.add_tag() is True
    assert form.tag_input == ""

    form.tag_input = "work"
    assert form.add_tag() is False
    assert form.tag_input == "work"
    assert form.tags.to_list() == ["work"]

    assert form.remove_tag("work") is True
    assert form.tags.to_list() == []


@pytest.mark.asyncio
async def test_submit_with_invalid_fields_does_not_call_service(service, alice):
    form = DocumentForm()
    form.content = "body"

    result = await form.submit(service, alice)

    assert not result.ok
    assert result.message == "Title is required"
    assert await service.list_documents(alice) == []


@pytest.mark.asyncio
async def test_submit_creates_document_with_tags(service, alice):
    form = DocumentForm()
    form.title = "Q1 Notes"
    form.content = "Revenue up"
    form.category = "Reports"
    for tag in ("finance", "q1", "finance"):
        form.tag_input = tag
        form.add_tag()

    result = await form.submit(service, alice)

    assert result.ok
    assert result.message == CREATED_MESSAGE
    assert result.document.tags == ["finance", "q1"]
    assert result.document.owner_id == alice.user_id
    assert not form.is_pending


@pytest.mark.asyncio
async def test_submit_without_identity_reports_failure_and_keeps_state(service):
    form = DocumentForm()
    form.title = "Draft"
    form.content = "Body"

    result = await form.submit(service, None)

    assert not result.ok
    assert result.message == CREATE_FAILED_MESSAGE
    assert form.title == "Draft"


@pytest.mark.asyncio
async def test_editor_save_updates_and_leaves_edit_mode(service, make_document, alice):
    document = await make_document(alice, title="Old", content="Body", tags=["keep"])
    editor = DocumentEditor(document)

    assert editor.begin()
    assert editor.is_editing
    assert (editor.title, editor.content, editor.category) == ("Old", "Body", "General")

    editor.title = "New"
    result = await editor.save(service, alice)

    assert result.ok
    assert result.message == UPDATED_MESSAGE
    assert not editor.is_editing
    assert editor.document.title == "New"
    assert editor.document.tags == ["keep"]


@pytest.mark.asyncio
async def test_editor_validation_failure_stays_in_edit_mode(service, make_document, alice):
    document = await make_document(alice)
    editor = DocumentEditor(document)
    editor.begin()
    editor.category = "c" * 51

    result = await editor.save(service, alice)

    assert not result.ok
    assert result.message == "Category must be less than 50 characters"
    assert editor.is_editing


@pytest.mark.asyncio
async def test_editor_remote_failure_keeps_document(service, make_document, alice, monkeypatch):
    document = await make_document(alice, title="Stable")
    editor = DocumentEditor(document)
    editor.begin()
    editor.title = "Changed"

    async def failing_update(*args, **kwargs):
        raise RemoteFailure()

    monkeypatch.setattr(service, "update_document", failing_update)
    result = await editor.save(service, alice)

    assert not result.ok
    assert result.message == UPDATE_FAILED_MESSAGE
    assert editor.is_editing
    assert editor.document.title == "Stable"
    assert not editor.is_pending


@pytest.mark.asyncio
async def test_editor_cancel_and_delete(service, make_document, alice):
    document = await make_document(alice)
    editor = DocumentEditor(document)
    editor.begin()
    editor.cancel()
    assert not editor.is_editing

    assert editor.request_delete().message == CONFIRM_DELETE_MESSAGE
    result = await editor.delete(service, alice)

    assert result.ok
    assert result.message == DELETED_MESSAGE
    assert not editor.is_confirming_delete
    assert await service.get_document(alice, document.uuid) is None


@pytest.mark.asyncio
async def test_editor_delete_requires_confirmation(service, make_document, alice):
    document = await make_document(alice)
    editor = DocumentEditor(document)

    result = await editor.delete(service, alice)
    assert not result.ok
    assert result.message == CONFIRM_DELETE_MESSAGE

    editor.request_delete()
    editor.cancel_delete()
    assert not (await editor.delete(service, alice)).ok

    assert await service.get_document(alice, document.uuid) is not None


@pytest.mark.asyncio
async def test_editor_delete_is_refused_while_pending(service, make_document, alice):
    document = await make_document(alice)
    editor = DocumentEditor(document)
    editor.request_delete()
    editor.is_pending = True

    result = await editor.delete(service, alice)

    assert not result.ok
    assert result.message == PENDING_MESSAGE
    assert await service.get_document(alice, document.uuid) is not None


@pytest.mark.asyncio
async def test_editor_edits_tags(service, make_document, alice):
    document = await make_document(alice, tags=["old", "keep"])
    editor = DocumentEditor(document)
    editor.begin()
    assert editor.tags.to_list() == ["old", "keep"]

    editor.tag_input = " new "
    assert editor.add_tag() is True
    assert editor.tag_input == ""
    assert editor.remove_tag("old") is True

    result = await editor.save(service, alice)

    assert result.ok
    assert editor.document.tags == ["keep", "new"]
    assert (await service.get_document(alice, document.uuid)).tags == ["keep", "new"]


def test_editor_without_document_cannot_begin():
    editor = DocumentEditor()
    assert editor.begin() is False
    assert not editor.is_editing
