"""Stick Analyzer prompt template.

Variables: {height}, {weight}, {age}, {gender}, {position}, {priority},
{primary_shot}, {shooting_zone}.
"""

from __future__ import annotations

STICK_ANALYSIS = """\
Analyze this player's shooting technique from the provided video and provide personalized \
stick recommendations.

PLAYER PROFILE:
- Height: {height}
- Weight: {weight}
- Age: {age}
- Gender: {gender}
- Position: {position}
- Priority: {priority}
- Primary Shot: {primary_shot}
- Shooting Zone: {shooting_zone}

HOCKEY STICK GUIDELINES:

Flex Guidelines (weight-based):
- Under 120 lbs: 50-60 flex (intermediate/youth)
- 120-140 lbs: 55-65 flex (intermediate)
- 140-160 lbs: 65-75 flex (intermediate/senior transition)
- 160-180 lbs: 75-85 flex (senior)
- Over 180 lbs: 85+ flex (senior)
- Female players: subtract an additional 5-10 from the ranges above
- Style: lower for wrist shots, higher for slap shots (+/-5)

Length Guidelines (height-based):
- Under 5'4": 52-54" (youth/junior)
- 5'4" to 5'7": 54-57" (intermediate)
- 5'7" to 5'10": 57-59" (intermediate/senior)
- Over 5'10": 59-62" (senior)
- Small players (under 5'7" OR under 140 lbs): use intermediate sticks

Curve Options:
- P92 (Mid-Toe, Open): quick elevation, wrist shots
- P88 (Mid, slightly closed): control, accurate passing
- P28 (Toe, Open): fast elevation, deceptive release
- P29 (Mid-Open): balanced versatility
- P90/P90TM (Modern Mid): balance of elevation and control

Kick Point:
- Low: fastest release (wrist/snap shots)
- Mid: balanced (all shot types)
- High: maximum power (slap shots)

Lie Angle: 4-6 range (ensure flat blade contact)

IMPORTANT: Return your analysis as valid JSON matching the schema. Provide RANGES for flex \
and length (min/max values). Each reasoning must be 35-40 words and specifically reference \
the player's profile. Recommend 3-5 specific stick models with match scores (0-100).

Base all recommendations on actual observations from the video and the player's profile.
"""
