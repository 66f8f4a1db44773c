"""
Prompt templates for MeteOps AI suggestions.
"""

from meteops.core.models import JustificationInput, SuggestedEditsInput

SYSTEM_PROMPT = (
    "You are an AI assistant helping MeteOps Leads. "
    "Always answer with a single JSON object matching the requested fields."
)

JUSTIFICATION_TEMPLATE = """You are an AI assistant that helps MeteOps Leads quickly create alert justifications.

Given the following information, suggest a justification for the alert. Be concise and clear.

Regions: {regions}
Event Date: {eventDate}
Event Type: {eventType}
Severity: {severity}
Ensemble Forecasts: {ensembleForecasts}

Respond as JSON: {{"justification": "<text>"}}"""

SUGGESTED_EDITS_TEMPLATE = """You are an AI assistant helping a MeteOps Lead identify suggested edits to an alert based on updated forecast data.

Original Alert: {originalAlert}
Updated Forecast Data: {updatedForecast}

Based on the updated forecast data, suggest specific edits to the original alert. Be as concise as possible.
Return the suggested edits, with explanations if necessary.

Respond as JSON: {{"suggestedEdits": "<text>"}}"""


def render_justification_prompt(data: JustificationInput) -> str:
    fields = data.model_dump()
    fields["regions"] = ", ".join(data.regions)
    return JUSTIFICATION_TEMPLATE.format(**fields)


def render_suggested_edits_prompt(data: SuggestedEditsInput) -> str:
    return SUGGESTED_EDITS_TEMPLATE.format(**data.model_dump())
