"""
Company branding.

Branding is an explicit value handed to whatever renders it, built from
the company row once per request (or on an explicit reload).
"""

from dataclasses import dataclass

from cpg_inventory.core.entities.company import Company, validate_hex_color


def hex_to_hsl_components(hex_color: str) -> str:
    """
    Convert a hex color to an HSL component string.

    e.g. "#800000" -> "0 100% 25%"
    """
    value = hex_color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)

    r = int(value[0:2], 16) / 255
    g = int(value[2:4], 16) / 255
    b = int(value[4:6], 16) / 255

    high = max(r, g, b)
    low = min(r, g, b)
    h = s = 0.0
    lightness = (high + low) / 2

    if high != low:
        d = high - low
        s = d / (2 - high - low) if lightness > 0.5 else d / (high + low)
        if high == r:
            h = (g - b) / d + (6 if g < b else 0)
        elif high == g:
            h = (b - r) / d + 2
        else:
            h = (r - g) / d + 4
        h /= 6

    return f"{round(h * 360)} {round(s * 100)}% {round(lightness * 100)}%"


@dataclass(frozen=True)
class BrandingConfig:
    """Primary and accent colors of one company."""

    primary_color: str
    accent_color: str

    def __post_init__(self) -> None:
        validate_hex_color(self.primary_color)
        validate_hex_color(self.accent_color)

    @classmethod
    def from_company(cls, company: Company) -> "BrandingConfig":
        return cls(primary_color=company.primary_color, accent_color=company.accent_color)

    def css_variables(self) -> dict[str, str]:
        """Theme variables consumed by the dashboard stylesheet."""
        primary_hsl = hex_to_hsl_components(self.primary_color)
        accent_hsl = hex_to_hsl_components(self.accent_color)
        return {
            "--primary": primary_hsl,
            "--accent": accent_hsl,
            "--ring": accent_hsl,
            "--company-primary": self.primary_color,
            "--company-accent": self.accent_color,
        }
