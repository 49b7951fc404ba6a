"""Tests for order and shipment numbering."""

from datetime import UTC, datetime

from cpg_inventory.core.services.numbering import (
    generate_order_number,
    generate_shipment_number,
)

NOW = datetime(2024, 1, 15, 12, 0, 0, 123000, tzinfo=UTC)
MILLIS = int(NOW.timestamp() * 1000)


class TestNumbering:
    def test_order_number_uses_last_six_digits(self):
        assert generate_order_number(now=NOW) == f"ORD-{str(MILLIS)[-6:]}"

    def test_order_number_length(self):
        assert len(generate_order_number(now=NOW)) == len("ORD-") + 6

    def test_shipment_number_uses_full_timestamp(self):
        assert generate_shipment_number(now=NOW) == f"SHP-{MILLIS}"

    def test_custom_prefix(self):
        assert generate_order_number("SO-", NOW).startswith("SO-")

    def test_defaults_to_current_time(self):
        assert generate_shipment_number().startswith("SHP-")
