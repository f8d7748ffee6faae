"""
Prompt contract for feedback analysis.

The template is the only thing that makes the model answer with a single
parseable JSON object of the expected shape. Keep its wording unchanged:
compliance from the target model family depends on it.
"""

_PROMPT_HEAD = """
You are an expert AI assistant specialized in analyzing employee feedback.
Your task is to process the provided employee feedback text (which may have been transcribed from audio) and return a JSON object with the following exact structure and data types:

{
  "sentiment": "string (Enum: Positive, Negative, Neutral, or Mixed)",
  "intensity": "number (Float between 0.0 for no emotion and 1.0 for very strong emotion)",
  "summary": "string (A concise one or two sentence summary of the main points in the feedback)",
  "moderation": {
    "action": "string (Enum: Allow, Block, or Request Rephrasing)",
    "reason": "string (A brief explanation for the moderation action. If 'Allow', state why it's acceptable.)"
  },
  "actionable_insight": "string (A specific, actionable suggestion or follow-up for HR based on the feedback. Be constructive.)"
}

Ensure the 'intensity' is a numerical value.
Ensure the 'summary' is brief and captures the essence.
For 'moderation.action', strictly use one of the three enum values.
For 'moderation.reason', be concise.
For 'actionable_insight', provide a concrete step HR can consider.

Analyze the following employee feedback text:
```
"""

_PROMPT_TAIL = """
```

Respond ONLY with the JSON object described above. Do not include any markdown formatting like ```json or any other text or explanations outside the JSON structure itself.
The entire response should be a single, valid JSON object.
"""


def build_analysis_prompt(feedback_text: str) -> str:
    """Embed the feedback text verbatim inside the analysis instructions."""
    return f"{_PROMPT_HEAD}{feedback_text}{_PROMPT_TAIL}"
