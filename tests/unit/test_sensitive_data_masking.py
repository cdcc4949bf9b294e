import pytest

pytestmark = pytest.mark.unit


class TestSensitiveDataMasking:
    def test_phone_fields_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {
            "event": "receiver.resolved_account",
            "phone_number": "0123456495",
            "receiver_phone_number": "+31 6 1234 5678",
        }
        result = mask_sensitive_data(None, None, event_dict)
        assert result["phone_number"] == "***MASKED***"
        assert result["receiver_phone_number"] == "***MASKED***"

    def test_inline_international_phone_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "note": "call +31 6 1234 5678 at the door"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "1234 5678" not in result["note"]
        assert "***MASKED***" in result["note"]

    def test_password_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "data": "password='s3cret123'"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "s3cret123" not in result["data"]
        assert "***MASKED***" in result["data"]

    def test_token_masked(self):
        from config.settings import mask_sensitive_data

        event_dict = {"event": "test", "header": "token=abc123xyz"}
        result = mask_sensitive_data(None, None, event_dict)
        assert "abc123xyz" not in result["header"]

    def test_empty_sensitive_field_left_alone(self):
        from config.settings import mask_sensitive_data

        result = mask_sensitive_data(None, None, {"event": "test", "phone_number": ""})
        assert result["phone_number"] == ""

    def test_non_sensitive_data_unchanged(self):
        from config.settings import mask_sensitive_data

        event_dict = {
            "event": "delivery_order.created",
            "order_id": 42,
            "timestamp": "2026-10-17T09:30:00.000000Z",
        }
        result = mask_sensitive_data(None, None, dict(event_dict))
        assert result == event_dict
