"""Size limits and body truncation."""

import json

import pytest

from push_envelope import Message, MessageTooLongError, Platform, PushSettings, SizeValidator, assemble
from push_envelope.wire.codec import byte_length, to_json

from conftest import decode, fake, lorem


def _measured(platform: str, payload: dict) -> int:
    section = payload if platform.startswith("APNS") else payload["data"]
    return byte_length(to_json(section))


class TestTooLong:
    @pytest.mark.parametrize("platform,length", [
        (Platform.APNS, 3000),
        (Platform.GCM, 6000),
        (Platform.ADM, 7000),
    ])
    def test_custom_data_over_limit(self, platform, length):
        message = Message(custom={"data": lorem(length)}, platforms={platform})
        with pytest.raises(MessageTooLongError) as exc:
            assemble(message)
        assert exc.value.platform == platform.value
        assert exc.value.measured_size > exc.value.limit

    @pytest.mark.parametrize("platform,length", [
        (Platform.APNS, 2000),
        (Platform.GCM, 4050),
        (Platform.ADM, 5050),
    ])
    def test_custom_data_under_limit(self, platform, length):
        message = Message(custom={"data": lorem(length)}, platforms={platform})
        data = decode(assemble(message))
        assert set(data) == {"default", platform.value}

    def test_text_cannot_rescue_custom_overflow(self):
        message = Message(text="short text", custom={"data": lorem(3000)}, platforms={Platform.APNS})
        with pytest.raises(MessageTooLongError):
            assemble(message)

    def test_localized_apns_cannot_truncate(self):
        message = Message(
            text=lorem(100),
            localized_key="KEY",
            localized_arguments=[lorem(1500), lorem(1500)],
            platforms={Platform.APNS},
        )
        with pytest.raises(MessageTooLongError):
            assemble(message)

    def test_trimming_disabled(self):
        message = Message(text=lorem(10000), allow_trimming=False, platforms={Platform.GCM})
        with pytest.raises(MessageTooLongError) as exc:
            assemble(message)
        assert exc.value.limit == 4096


class TestTruncation:
    def test_long_text_fits_every_platform(self):
        text = fake.text(10000) + lorem(10000)
        data = json.loads(assemble(Message(text=text)))

        assert data["default"] == text
        for platform in Platform:
            payload = json.loads(data[platform.value])
            limit = PushSettings().limit_for(platform)
            assert _measured(platform.value, payload) <= limit

        body = json.loads(data["APNS"])["aps"]["alert"]["body"]
        assert body.endswith("...")
        assert text.startswith(body[:-3])
        assert json.loads(data["GCM"])["data"]["message"].endswith("...")
        assert json.loads(data["ADM"])["data"]["message"].endswith("...")

    def test_cut_is_as_long_as_fits(self):
        text = "a" * 10000
        result = SizeValidator().validate(Message(text=text), Platform.APNS)
        assert result.truncated
        assert result.size == 2048

    def test_escaped_characters(self):
        text = '"' * 3000
        result = SizeValidator().validate(Message(text=text), Platform.APNS)
        assert result.ok and result.truncated
        body = json.loads(result.payload)["aps"]["alert"]["body"]
        assert body == '"' * 1008 + "..."

    def test_multibyte_text_cut_on_character_boundary(self):
        text = "日本語のテキスト" * 1000
        result = SizeValidator().validate(Message(text=text), Platform.GCM)
        message = json.loads(result.payload)["data"]["message"]
        assert result.size <= 4096
        assert "�" not in message
        assert text.startswith(message[:-3])

    def test_custom_marker(self):
        settings = PushSettings(truncation_marker="…")
        result = SizeValidator(settings).validate(Message(text=lorem(5000)), Platform.ADM)
        assert result.size <= 6144
        assert json.loads(result.payload)["data"]["message"].endswith("…")

    def test_fitting_text_not_truncated(self):
        text = lorem(1500)
        result = SizeValidator().validate(Message(text=text), Platform.APNS)
        assert not result.truncated
        assert json.loads(result.payload)["aps"]["alert"]["body"] == text

    def test_custom_limit(self):
        settings = PushSettings(limits={Platform.GCM: 200})
        result = SizeValidator(settings).validate(Message(text=lorem(500)), Platform.GCM)
        assert result.truncated
        assert result.limit == 200
        assert result.size <= 200

    def test_repeatable(self):
        message = Message(text=fake.text(10000) + lorem(8000), title="t", custom={"k": {"v": 1}})
        assert assemble(message) == assemble(message)


class TestMeasure:
    def test_apns_counts_whole_payload(self):
        validator = SizeValidator()
        payload = {"aps": {"alert": {"body": "hi"}}}
        assert validator.measure(payload, Platform.APNS) == len('{"aps":{"alert":{"body":"hi"}}}')

    def test_gcm_counts_data(self):
        validator = SizeValidator()
        payload = {"data": {"message": "hi"}, "collapse_key": "x"}
        assert validator.measure(payload, Platform.GCM) == len('{"message":"hi"}')

    def test_counts_bytes_not_characters(self):
        validator = SizeValidator()
        assert validator.measure({"data": {"m": "é"}}, Platform.ADM) == len('{"m":"é"}'.encode("utf-8"))


class TestResult:
    def test_unwrap_raises_error(self):
        result = SizeValidator().validate(
            Message(custom={"data": lorem(3000)}), Platform.APNS,
        )
        assert not result.ok
        assert result.payload is None
        with pytest.raises(MessageTooLongError):
            result.unwrap()

    def test_unwrap_returns_payload(self):
        result = SizeValidator().validate(Message(text="hi"), Platform.ADM)
        assert result.ok
        assert json.loads(result.unwrap()) == {"data": {"message": "hi"}, "expiresAfter": None}

    def test_unwrap_failed_result_has_no_payload(self):
        result = SizeValidator().validate(Message(custom={"data": lorem(7000)}), Platform.ADM)
        assert result.payload is None
        assert result.error is not None
        with pytest.raises(MessageTooLongError):
            result.unwrap()
