"""Measures converter plugin."""

manifest = {
    "title": "Measures Converter",
    "summary": "Convert length and weight values between metric and imperial units.",
    "blueprint": "measures_converter",
    "category": "General Utilities",
}


__all__ = ["manifest"]
