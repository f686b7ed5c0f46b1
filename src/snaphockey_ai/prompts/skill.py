"""Skill Check prompt template.

The player's optional request is appended by ``SkillCheckContext.prompt_context``.
"""

from __future__ import annotations

SKILL_ANALYSIS = """\
Analyze this hockey video and provide a comprehensive evaluation of whatever skill is being \
demonstrated.

The video could show any hockey skill including:
- Shooting (wrist shot, slap shot, snapshot, backhand)
- Stickhandling (dekes, puck control, hands)
- Skating (speed, edges, transitions, stops)
- Passing (tape-to-tape, saucer passes)
- Goaltending (positioning, saves, movement)
- Defensive skills (stick checks, positioning)
- Or any other hockey-related skill

Provide the following:

1. **Category**: Identify what skill is being demonstrated (e.g., "wrist shot", "skating", \
"stickhandling")

2. **Overall Rating** (0-100): Holistic assessment of skill execution quality. NEVER use \
multiples of 5 (not 70, 75, 80, etc). Use natural numbers like 73, 78, 82, 87, 91.

3. **AI Comment**: A fun, personalized 1-2 sentence comment from Greeny (the AI mascot). \
Be encouraging and reference specific things you observed in the video.

4. **What You Did Well** (exactly 3 items): Specific positive observations about their \
technique. Each item = 1 short sentence.

5. **What To Work On** (exactly 3 items): Specific, constructive areas for improvement. \
Each item = 1 short sentence.

6. **How To Improve** (exactly 3 items): Practical drills or exercises, with the drill name \
and a brief description. Each item = 1 short sentence.

CRITICAL REQUIREMENTS:
- Base ALL feedback on actual observations from the video - don't make generic statements
- Be specific about technique (stick position, body mechanics, timing, weight transfer, etc.)
- Each array must have EXACTLY 3 items - no more, no less
- The feedback should work for ANY skill the user submits (shooting, skating, goalie, etc.)
- Return valid JSON matching the schema"""
