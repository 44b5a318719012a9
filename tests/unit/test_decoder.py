"""Tests for the NDJSON message decoder."""

import pytest
from hypothesis import given, strategies as st

from a2ui_client.core import DecodeError
from a2ui_client.protocol import (
    ActionDescriptor,
    BeginRendering,
    Button,
    Card,
    Column,
    DataModelUpdate,
    Message,
    MessageDecoder,
    SurfaceUpdate,
    Text,
    TextField,
    decode_messages,
    encode_messages,
)


@pytest.mark.unit
def test_decode_booking_form(decoder, booking_form_payload):
    """Test decoding a full surface batch."""
    messages = decoder.decode(booking_form_payload)

    assert [m.kinds for m in messages] == [["beginRendering"], ["surfaceUpdate"], ["dataModelUpdate"]]
    assert messages[0].begin_rendering.surface_id == "booking-form"
    assert messages[0].begin_rendering.root == "root"
    assert len(messages[1].surface_update.components) == 10
    assert messages[2].data_model_update.contents["/form/time"] == "19:00"


@pytest.mark.unit
def test_decode_skips_blank_lines(decoder):
    """Test blank and whitespace-only lines are ignored."""
    payload = '\n   \n{"beginRendering": {"surfaceId": "s1", "root": "root"}}\r\n\t\n'
    messages = decoder.decode(payload)

    assert len(messages) == 1
    assert messages[0].begin_rendering.surface_id == "s1"


@pytest.mark.unit
def test_decode_empty_payload(decoder):
    """Test an empty body decodes to an empty batch."""
    assert decoder.decode("") == []
    assert decoder.decode("\n\n") == []


@pytest.mark.unit
def test_decode_bytes_payload(decoder):
    """Test raw bytes are accepted."""
    messages = decoder.decode(b'{"beginRendering": {"surfaceId": "s1", "root": "r"}}\n')
    assert messages[0].begin_rendering.root == "r"


@pytest.mark.unit
def test_decode_malformed_line_rejects_batch(decoder):
    """Test one bad line fails the whole batch."""
    payload = (
        '{"beginRendering": {"surfaceId": "s1", "root": "root"}}\n'
        '{"surfaceUpdate": {"components": [\n'
    )
    with pytest.raises(DecodeError) as exc_info:
        decoder.decode(payload)

    assert exc_info.value.line_number == 2


@pytest.mark.unit
def test_decode_non_object_line(decoder):
    """Test a JSON array line is rejected."""
    with pytest.raises(DecodeError):
        decoder.decode("[1, 2, 3]\n")


@pytest.mark.unit
def test_decode_multi_key_message_is_forwarded(decoder):
    """Test a message carrying several fields keeps all of them."""
    payload = (
        '{"beginRendering": {"surfaceId": "s1", "root": "root"},'
        ' "dataModelUpdate": {"surfaceId": "s1", "contents": {"/x": 1}}}\n'
    )
    messages = decoder.decode(payload)

    assert len(messages) == 1
    assert messages[0].kinds == ["beginRendering", "dataModelUpdate"]


@pytest.mark.unit
def test_decode_unrecognized_message_skipped(decoder):
    """Test a line with no known message field is dropped."""
    payload = '{"ping": {}}\n{"beginRendering": {"surfaceId": "s1", "root": "root"}}\n'
    messages = decoder.decode(payload)

    assert len(messages) == 1
    assert messages[0].begin_rendering is not None


@pytest.mark.unit
def test_decode_delete_surface(decoder):
    """Test deleteSurface decodes."""
    messages = decoder.decode('{"deleteSurface": {"surfaceId": "s1"}}\n')
    assert messages[0].delete_surface.surface_id == "s1"


@pytest.mark.unit
def test_decode_invalid_component_rejects_batch(decoder):
    """Test a component with two shapes fails the batch."""
    payload = (
        '{"surfaceUpdate": {"surfaceId": "s1", "components": ['
        '{"id": "a", "Text": {"text": "x"}, "Column": {"children": []}}]}}\n'
    )
    with pytest.raises(DecodeError, match="multiple shapes"):
        decoder.decode(payload)


@pytest.mark.unit
def test_decode_begin_rendering_requires_root(decoder):
    """Test beginRendering without root is invalid."""
    with pytest.raises(DecodeError):
        decoder.decode('{"beginRendering": {"surfaceId": "s1"}}\n')


@pytest.mark.unit
def test_decode_lone_surrogate(decoder):
    """Test a str payload that cannot be UTF-8 encoded is a DecodeError."""
    payload = (
        '{"beginRendering": {"surfaceId": "s1", "root": "root"}}\n'
        '{"dataModelUpdate": {"contents": {"/a": "\ud800"}}}\n'
    )

    with pytest.raises(DecodeError, match="not valid UTF-8") as exc_info:
        decoder.decode(payload)

    assert exc_info.value.line_number == 2


@pytest.mark.unit
def test_decode_line_size_limit():
    """Test oversized lines are rejected."""
    decoder = MessageDecoder(max_line_bytes=64)
    line = '{"dataModelUpdate": {"surfaceId": "s1", "contents": {"/x": "' + "a" * 100 + '"}}}\n'

    with pytest.raises(DecodeError, match="exceeds maximum"):
        decoder.decode(line)


@pytest.mark.unit
def test_decode_depth_limit():
    """Test deeply nested lines are rejected."""
    decoder = MessageDecoder(max_json_depth=4)
    nested = '{"a": ' * 6 + "1" + "}" * 6
    line = '{"dataModelUpdate": {"surfaceId": "s1", "contents": {"/x": ' + nested + "}}}\n"

    with pytest.raises(DecodeError, match="nesting depth"):
        decoder.decode(line)


@pytest.mark.unit
def test_encode_writes_one_line_per_message():
    """Test NDJSON encoding."""
    messages = [
        Message(begin_rendering=BeginRendering(surface_id="s1", root="root")),
        Message(surface_update=SurfaceUpdate(surface_id="s1", components=[Text(id="root", text="Hello")])),
    ]
    text = encode_messages(messages)
    lines = text.splitlines()

    assert text.endswith("\n")
    assert len(lines) == 2
    assert lines[0] == '{"beginRendering":{"surfaceId":"s1","root":"root"}}'
    assert '"Text":{"text":"Hello"}' in lines[1]


@pytest.mark.unit
def test_decode_encode_roundtrip(decoder, booking_form_payload):
    """Test decoding the re-encoded batch yields the same messages."""
    messages = decoder.decode(booking_form_payload)
    assert decoder.decode(decoder.encode(messages)) == messages


# ============================================================================
# Property Tests
# ============================================================================

ids = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-_0123456789", min_size=1, max_size=12)
paths = ids.map(lambda s: f"/form/{s}")
scalars = st.one_of(
    st.none(),
    st.booleans(),
    st.integers(min_value=-(2**53), max_value=2**53),
    st.text(max_size=20),
)
json_values = st.recursive(
    scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=3),
        st.dictionaries(st.text(max_size=8), children, max_size=3),
    ),
    max_leaves=8,
)

components = st.one_of(
    st.builds(Column, id=ids, children=st.lists(ids, max_size=4).map(tuple)),
    st.builds(Card, id=ids, child=ids),
    st.builds(Text, id=ids, text=st.one_of(st.none(), st.text(max_size=20)), binding_path=st.one_of(st.none(), paths)),
    st.builds(
        TextField,
        id=ids,
        label=st.one_of(st.none(), st.text(max_size=10)),
        placeholder=st.one_of(st.none(), st.text(max_size=10)),
        binding_path=st.one_of(st.none(), paths),
    ),
    st.builds(
        Button,
        id=ids,
        text=st.text(max_size=10),
        action=st.builds(
            ActionDescriptor,
            type=st.sampled_from(["submit", "navigate", "custom"]),
            data=st.dictionaries(st.text(min_size=1, max_size=8), scalars, max_size=3),
        ),
    ),
)

messages_strategy = st.lists(
    st.one_of(
        st.builds(Message, begin_rendering=st.builds(BeginRendering, surface_id=ids, root=ids)),
        st.builds(
            Message,
            surface_update=st.builds(SurfaceUpdate, surface_id=ids, components=st.lists(components, max_size=4)),
        ),
        st.builds(
            Message,
            data_model_update=st.builds(
                DataModelUpdate, surface_id=ids, contents=st.dictionaries(paths, json_values, max_size=4)
            ),
        ),
    ),
    max_size=5,
)


@pytest.mark.unit
@given(messages_strategy)
def test_roundtrip_preserves_fields(messages):
    """Property test: encode then decode preserves every field."""
    assert decode_messages(encode_messages(messages)) == messages


@pytest.mark.unit
def test_unsupported_scalar_body_roundtrip(decoder):
    """Test a non-object body of an unknown component is re-encoded unchanged."""
    line = '{"surfaceUpdate":{"surfaceId":"s1","components":[{"id":"d","Divider":true}]}}\n'
    assert decoder.encode(decoder.decode(line)) == line
