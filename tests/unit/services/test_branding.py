"""Tests for company branding."""

import pytest

from cpg_inventory.core.entities.company import Company
from cpg_inventory.core.services.branding import BrandingConfig, hex_to_hsl_components


class TestHexToHsl:
    @pytest.mark.parametrize(
        ("hex_color", "expected"),
        [
            ("#800000", "0 100% 25%"),
            ("#FFFFFF", "0 0% 100%"),
            ("#000000", "0 0% 0%"),
            ("#00FF00", "120 100% 50%"),
            ("#0000FF", "240 100% 50%"),
            ("#f00", "0 100% 50%"),
        ],
    )
    def test_conversion(self, hex_color, expected):
        assert hex_to_hsl_components(hex_color) == expected


class TestBrandingConfig:
    def test_from_company(self):
        company = Company(
            name="Acme", domain="acme.test", primary_color="#800000", accent_color="#D3AF37"
        )
        branding = BrandingConfig.from_company(company)
        assert branding.primary_color == "#800000"
        assert branding.accent_color == "#D3AF37"

    def test_css_variables(self):
        branding = BrandingConfig(primary_color="#800000", accent_color="#0000FF")
        variables = branding.css_variables()
        assert variables["--primary"] == "0 100% 25%"
        assert variables["--accent"] == "240 100% 50%"
        assert variables["--company-primary"] == "#800000"
        assert variables["--company-accent"] == "#0000FF"
        assert "--ring" in variables

    def test_invalid_color_rejected(self):
        with pytest.raises(ValueError):
            BrandingConfig(primary_color="maroon", accent_color="#D3AF37")
