from typing import Any, Iterable

from Qt.QtGui import QColor, QFont, QTextCharFormat

from .tag_registry import Category, TagStyleRule

# Formats for the class names produced by the tag registry
# fmt: off
FORMAT_SPECS = {
    "cm-string":         {"color": "#A31515"},
    "cm-number":         {"color": "#098658"},
    "cm-identifier":     {"color": "#001080"},
    "cm-boolean":        {"color": "#0000FF"},
    "cm-keyword":        {"color": "#AF00DB", "bold": True},
    "cm-sqlkeyword":     {"color": "#0000FF", "bold": True},
    "cm-symbol":         {"color": "#000000"},
    "cm-null-undefined": {"color": "#0000FF", "italic": True},
}

COLORS = {
    "bg": "#FFFFFF",
    "fg": "#000000",
}
# fmt: on

# Fallbacks for registered tags whose class has no entry above
# fmt: off
CATEGORY_SPECS = {
    Category.STRING:     {"color": "#A31515"},
    Category.NUMBER:     {"color": "#098658"},
    Category.IDENTIFIER: {"color": "#001080"},
    Category.BOOLEAN:    {"color": "#0000FF"},
    Category.LINK:       {"color": "#AF00DB", "underline": True},
    Category.KEYWORD:    {"color": "#0000FF", "bold": True},
    Category.OPERATOR:   {"color": "#000000"},
    Category.NULL:       {"color": "#0000FF", "italic": True},
}
# fmt: on


def rule_format_specs(
    rules: Iterable[TagStyleRule], class_specs: dict[str, dict[str, Any]]
) -> dict[str, dict[str, Any]]:
    """Pick a format spec for every class name the style rules use

    A spec keyed by the class name wins, otherwise the rule's category
    decides.
    """
    out = {}
    for rule in rules:
        if rule.class_name not in out:
            out[rule.class_name] = class_specs.get(
                rule.class_name, CATEGORY_SPECS[rule.category]
            )
    return out


def compile_formats(format_specs: dict[str, dict[str, Any]]) -> dict[str, QTextCharFormat]:
    """Convert user style specs -> QTextCharFormat instances, keyed by class name"""
    out = {}

    for name, spec in format_specs.items():
        fmt = QTextCharFormat()
        if "color" in spec:
            fmt.setForeground(QColor(spec["color"]))
        if "background" in spec:
            fmt.setBackground(QColor(spec["background"]))
        if spec.get("bold"):
            fmt.setFontWeight(QFont.Bold)
        if spec.get("italic"):
            fmt.setFontItalic(True)
        if spec.get("underline"):
            fmt.setFontUnderline(True)
        out[name] = fmt

    return out
