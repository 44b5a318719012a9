"""NDJSON Decoder - raw payload to typed protocol messages."""

from typing import Iterable

from a2ui_client.core import DecodeError, get_logger, get_settings
from a2ui_client.core.json import JSONParseError, loads_object, safe_json_dumps, validate_json_depth
from a2ui_client.monitoring import metrics_collector
from a2ui_client.protocol.models import Message

logger = get_logger(__name__)


class MessageDecoder:
    """Decodes newline-delimited JSON batches into protocol messages."""

    def __init__(self, max_line_bytes: int | None = None, max_json_depth: int | None = None) -> None:
        settings = get_settings()
        self.max_line_bytes = max_line_bytes or settings.max_line_bytes
        self.max_json_depth = max_json_depth or settings.max_json_depth

    def decode(self, payload: str | bytes) -> list[Message]:
        """
        Decode a whole NDJSON batch.

        Blank lines are skipped. Every other line must be one JSON object;
        a single bad line rejects the entire batch.

        Args:
            payload: Raw response body

        Returns:
            Messages in arrival order

        Raises:
            DecodeError: If any line is malformed
        """
        if isinstance(payload, bytes):
            try:
                payload = payload.decode("utf-8")
            except UnicodeDecodeError as e:
                metrics_collector.record_decode_error()
                raise DecodeError(f"payload is not valid UTF-8: {e}") from e

        messages: list[Message] = []
        for line_number, line in enumerate(payload.split("\n"), start=1):
            if not line.strip():
                continue

            message = self._decode_line(line, line_number)
            if not message.kinds:
                logger.warning("unrecognized_message", line=line_number)
                continue
            messages.append(message)

        for message in messages:
            for kind in message.kinds:
                metrics_collector.record_message(kind)

        logger.debug("batch_decoded", messages=len(messages))
        return messages

    def _decode_line(self, line: str, line_number: int) -> Message:
        try:
            raw = line.encode("utf-8")
        except UnicodeEncodeError as e:
            # Lone surrogates in a str payload
            metrics_collector.record_decode_error()
            logger.error("line_not_utf8", line=line_number, error=e.reason)
            raise DecodeError(f"line is not valid UTF-8: {e.reason}", line_number) from e

        if len(raw) > self.max_line_bytes:
            metrics_collector.record_decode_error()
            logger.error("line_too_large", line=line_number, size=len(raw))
            raise DecodeError(
                f"line size {len(raw)} bytes exceeds maximum {self.max_line_bytes} bytes", line_number
            )

        try:
            obj = loads_object(raw)
            validate_json_depth(obj, self.max_json_depth)
            return Message.model_validate(obj)
        except JSONParseError as e:
            metrics_collector.record_decode_error()
            logger.error("json_parse_failed", line=line_number, error=str(e))
            raise DecodeError(str(e), line_number) from e
        except ValueError as e:
            # pydantic.ValidationError is a ValueError
            metrics_collector.record_decode_error()
            logger.error("invalid_message", line=line_number, error=str(e))
            raise DecodeError(f"invalid message: {e}", line_number) from e

    def encode(self, messages: Iterable[Message]) -> str:
        """Encode messages as NDJSON, one compact object per line."""
        return "".join(safe_json_dumps(message.to_wire()) + "\n" for message in messages)


def decode_messages(payload: str | bytes) -> list[Message]:
    """
    Convenience function to decode an NDJSON batch

    Args:
        payload: Raw NDJSON text

    Returns:
        Messages in arrival order
    """
    return MessageDecoder().decode(payload)


def encode_messages(messages: Iterable[Message]) -> str:
    """Convenience function to encode messages as NDJSON."""
    return MessageDecoder().encode(messages)
