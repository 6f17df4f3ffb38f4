import logging

from cmdframe.modal import ActionRow, InputText, ModalInteractionData, find_modal_text


def make_data(*rows):
    return ModalInteractionData(custom_id="modal", components=list(rows))


def test_finds_and_takes_value():
    field = InputText("first", "hello")
    data = make_data(ActionRow([InputText("zero", "x")]), ActionRow([field]))
    assert find_modal_text(data, "first") == "hello"
    assert field.value is None
    assert find_modal_text(data, "first") is None


def test_empty_value_is_none():
    data = make_data(ActionRow([InputText("first", "")]))
    assert find_modal_text(data, "first") is None


def test_missing_value_is_none():
    data = make_data(ActionRow([InputText("first", None)]))
    assert find_modal_text(data, "first") is None


def test_not_found_logs_warning(caplog):
    data = make_data(ActionRow([InputText("first", "a")]))
    with caplog.at_level(logging.WARNING, logger="cmdframe.modal"):
        assert find_modal_text(data, "second") is None
    assert "second not found in modal response" in caplog.text


def test_skips_unexpected_rows(caplog):
    data = make_data(
        ActionRow([]),
        ActionRow(["a button"]),
        ActionRow([InputText("wanted", "value")]),
    )
    with caplog.at_level(logging.WARNING, logger="cmdframe.modal"):
        assert find_modal_text(data, "wanted") == "value"
    assert "empty action row in modal response" in caplog.text
    assert "unexpected non input text component in modal response" in caplog.text


def test_only_first_component_of_row_is_checked():
    data = make_data(ActionRow([InputText("a", "1"), InputText("b", "2")]))
    assert find_modal_text(data, "b") is None
    assert find_modal_text(data, "a") == "1"


def test_other_inputs_untouched():
    other = InputText("other", "keep")
    data = make_data(ActionRow([other]), ActionRow([InputText("take", "me")]))
    assert find_modal_text(data, "take") == "me"
    assert other.value == "keep"