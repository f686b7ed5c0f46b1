"""Shot Rater prompt template.

Variables: {shot_name} (display name of the selected shot type).
"""

from __future__ import annotations

SHOT_ANALYSIS = """\
Analyze this {shot_name} hockey shot and provide a comprehensive evaluation.

Evaluate the following aspects based on what you observe in the video:

1. **Technique** (0-100): Rate the shot mechanics, form, weight transfer, stick handling, \
and overall execution quality
2. **Power** (0-100): Rate the shot velocity potential, energy transfer, loading mechanics, \
and explosive force generation
3. **Overall Rating** (0-100): Holistic assessment of the shot quality considering both \
technique and power

For each score, provide specific reasoning based on observations from the video (what you \
actually see, not generic advice).

Include a brief 2-3 sentence summary highlighting the key strengths and areas for improvement.

IMPORTANT: Return your analysis as valid JSON matching the schema. Base all scores and \
feedback on actual observations from the video."""
