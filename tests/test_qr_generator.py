"""
QR rendering tests.
"""
import pytest
from app.core.exceptions import PayloadTooLarge
from app.utils.qr_generator import generate_qr_svg


class TestGenerateQrSvg:
    """Test vector QR output for ticket ids and event codes."""

    def test_renders_svg_markup(self):
        svg = generate_qr_svg("e1#m1")

        assert isinstance(svg, str)
        assert "<svg" in svg
        assert "</svg>" in svg

    def test_same_payload_renders_identical_output(self):
        assert generate_qr_svg("e1#m1") == generate_qr_svg("e1#m1")

    def test_different_payloads_render_differently(self):
        assert generate_qr_svg("e1#m1") != generate_qr_svg("e1#m2")

    @pytest.mark.parametrize("payload", [
        "42613",
        "e1%23m1",
        "café ✓ 票",
        "x" * 1000,
    ])
    def test_does_not_reject_payload_content(self, payload):
        assert "<svg" in generate_qr_svg(payload)

    def test_payload_over_capacity_raises(self):
        with pytest.raises(PayloadTooLarge):
            generate_qr_svg("x" * 5000)
