"""Prompt templates and fallback advice for fix suggestions."""

from enum import Enum

from ..models import AuditFinding


class FixKind(Enum):
    ALT_TEXT = "alt_text"
    COLOR_CONTRAST = "color_contrast"
    LABEL = "label"
    GENERIC = "generic"


RESPONSE_FORMAT = """Respond in this EXACT format:
FIXED_HTML:
[corrected HTML here]

EXPLANATION:
[{explanation_hint}]"""


def classify_rule(rule_id: str) -> FixKind:
    """Pick a prompt family from an axe-core rule id."""
    if "image-alt" in rule_id or "alt-text" in rule_id:
        return FixKind.ALT_TEXT
    if "color-contrast" in rule_id:
        return FixKind.COLOR_CONTRAST
    if "label" in rule_id or "form" in rule_id:
        return FixKind.LABEL
    return FixKind.GENERIC


def build_prompt(finding: AuditFinding) -> str:
    """Build the fix prompt for a violation's first affected element."""
    html = finding.first_html
    kind = classify_rule(finding.rule_id)

    if kind is FixKind.ALT_TEXT:
        return f"""You are an accessibility expert. Fix this image HTML by adding a proper alt attribute.

Current HTML:
{html}

Context: {finding.description or 'General website image'}

Instructions:
1. Return the FIXED HTML with a descriptive alt attribute
2. Alt text should be concise (under 125 characters)
3. Describe what's in the image, not that it's an image
4. Don't start with "Image of" or "Picture of"
5. If the image is decorative, use alt=""
6. Keep all other attributes unchanged

""" + RESPONSE_FORMAT.format(explanation_hint="brief explanation of the alt text you chose and why")

    if kind is FixKind.COLOR_CONTRAST:
        return f"""You are an accessibility expert. Fix this HTML to meet WCAG 2.1 AA color contrast standards (4.5:1 for normal text, 3:1 for large text).

Current HTML with contrast issue:
{html}

Context: {finding.description or 'Color contrast violation'}
WCAG Reference: {finding.help_url or 'color-contrast'}

Instructions:
1. Return the FIXED HTML with proper color contrast
2. Modify inline styles or add style attribute with accessible colors
3. Use colors that meet minimum 4.5:1 contrast ratio
4. Keep the HTML structure identical, only fix colors

""" + RESPONSE_FORMAT.format(explanation_hint="brief explanation of what was changed and why")

    if kind is FixKind.LABEL:
        return f"""You are an accessibility expert. Fix this form input by adding a proper label element.

Current HTML:
{html}

Context: {finding.description or 'Form input field'}

Instructions:
1. Return the FIXED HTML with a <label> element
2. Ensure the input has an id attribute
3. Link the label to the input using for="[id]"
4. Label text should be clear and descriptive (2-5 words)
5. Place the label before the input element
6. Keep all other attributes unchanged

""" + RESPONSE_FORMAT.format(explanation_hint="brief explanation of the label text you chose and why")

    return f"""You are an accessibility expert. Fix this WCAG accessibility violation.

Violation Type: {finding.rule_id}
Description: {finding.description}
Help Text: {finding.help}
Current HTML:
{html}

WCAG Reference: {finding.help_url}

Instructions:
1. Return the FIXED HTML that resolves this accessibility issue
2. Keep the HTML structure as similar as possible
3. Only change what's necessary to fix the violation
4. Ensure the fix meets WCAG 2.1 standards

""" + RESPONSE_FORMAT.format(
        explanation_hint="2-3 sentences explaining what was changed and why it matters for accessibility"
    )


def default_explanation(finding: AuditFinding) -> str:
    """Explanation used when the model answers without an EXPLANATION section."""
    return {
        FixKind.ALT_TEXT: "Added descriptive alt text for screen readers.",
        FixKind.COLOR_CONTRAST: "Fixed color contrast to meet WCAG AA standards.",
        FixKind.LABEL: "Added accessible label for form input.",
    }.get(classify_rule(finding.rule_id), f"Fixed {finding.rule_id} violation to meet WCAG standards.")


def fallback_explanation(finding: AuditFinding) -> str:
    """Manual guidance used when no AI suggestion is available."""
    kind = classify_rule(finding.rule_id)
    header = "Unable to generate AI fix. Manual review needed.\n\n"

    if kind is FixKind.ALT_TEXT:
        return header + (
            "To fix missing alt text:\n"
            '1. Add alt="" for decorative images\n'
            '2. Add descriptive alt="..." for meaningful images\n'
            "3. Describe what's in the image, not that it's an image\n"
            "4. Keep it under 125 characters"
        )
    if kind is FixKind.COLOR_CONTRAST:
        return header + (
            "To fix color contrast:\n"
            "1. Use dark text on light backgrounds (e.g., #000000 on #FFFFFF)\n"
            "2. Or light text on dark backgrounds (e.g., #FFFFFF on #000000)\n"
            "3. Ensure minimum 4.5:1 contrast ratio\n"
            "4. Test with WebAIM Contrast Checker: https://webaim.org/resources/contrastchecker/"
        )
    if kind is FixKind.LABEL:
        return header + (
            "To fix missing label:\n"
            '1. Add an id to the input: <input id="myInput" ...>\n'
            '2. Add a label before it: <label for="myInput">Label Text</label>\n'
            "3. Or wrap it: <label>Label Text <input ...></label>\n"
            "4. Label should describe what to enter"
        )
    return header + f"Violation: {finding.help}\n\nSee WCAG guidelines: {finding.help_url}"
