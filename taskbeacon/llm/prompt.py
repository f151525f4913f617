"""
FILE: taskbeacon/llm/prompt.py
PURPOSE: Build the enrichment prompt and parse the model's answer
EXPORTS:
  - build_prompt(description, beacons, projects) -> str
  - parse_suggestion_response(text) -> Suggestion
DEPENDENCIES:
  - taskbeacon.utils (extract_json_object)
  - taskbeacon.core.models (Suggestion, Beacon, ProjectRule)
  - taskbeacon.core.exceptions (ProviderError)
NOTES:
  - The full catalog and project list go into every prompt (no session state)
  - The first {...} object in the reply is used; surrounding prose is ignored
"""

from typing import Sequence

from ..utils import extract_json_object
from ..core.models import Suggestion, Beacon, ProjectRule
from ..core.exceptions import ProviderError


_INTRO = """You are a task enrichment assistant. Analyze the given task and suggest appropriate tags and metadata based on the user's personal goal system called "Beacons".

## Beacons System
The user organizes tasks around high-level life goals (Beacons) and specific paths to achieve them (Directions).
Tasks that align with MULTIPLE beacons should be prioritized higher.
Tasks that don't align with ANY beacon should be marked as "waste".

### Available Beacons and their Directions:
"""

_ASSESSMENT = """
## Task Assessment Dimensions

### Effort (mental/cognitive difficulty)
- E (Easy): Quick, straightforward, low cognitive load
- N (Normal): Standard complexity, moderate thinking required
- D (Difficult): Complex, requires deep focus, mentally taxing

### Impact (value delivered)
- H (High): Benefits many people, unlocks future progress, significant consequences if skipped
- M (Medium): Moderate value, helps some people or processes
- L (Low): Limited impact, nice-to-have

### Time Estimate (use pessimistic estimation)
Values: 15m, 30m, 1h, 2h, 4h, 8h, 2d
Ask: "Would X time be enough?" - when answer is "maybe", double it.

### Fun (enjoyment level)
- H (High): Enjoyable, engaging task
- M (Medium): Neutral
- L (Low): Boring, tedious (these get urgency bump to get them done)

### Blocks
How many other tasks or people are waiting on this one (0 when nothing is blocked).
"""

_INSTRUCTIONS = """
## Instructions
1. Analyze the task description
2. Identify which Beacons this task contributes to (can be multiple)
3. Identify specific Directions within those Beacons
4. Suggest a project if keywords match
5. Suggest priority (H=high, M=medium, L=low) based on external pressure/deadlines
6. Assess effort, impact, time estimate, fun level and blocks
7. Suggest due date only if there's a clear time reference in the task;
   use scheduled for a soft "start on" date
8. Optionally improve the description to be more actionable
9. If the task doesn't align with any beacon, mark it as waste

Respond with ONLY a JSON object in this exact format:
{
  "description": "improved task description or original if no improvement needed",
  "beacons": ["b.beacon1", "b.beacon2"],
  "directions": ["d.direction1", "d.direction2"],
  "project": "project-name or empty string",
  "priority": "H/M/L or empty string",
  "due": "taskwarrior due format (e.g., 'tomorrow', '2024-12-01', 'eow') or empty string",
  "scheduled": "taskwarrior date or empty string",
  "effort": "E/N/D",
  "impact": "H/M/L",
  "estimate": "15m/30m/1h/2h/4h/8h/2d",
  "fun": "H/M/L",
  "blocks": 0,
  "is_waste": false,
  "reasoning": "brief explanation of the assessment"
}
"""


def build_prompt(
    description: str,
    beacons: Sequence[Beacon],
    projects: Sequence[ProjectRule] = (),
) -> str:
    """
    Build the prompt for one task description.

    Args:
        description: Task text as typed or exported
        beacons: Goal catalog with directions
        projects: Known projects with keyword hints (section omitted when empty)
    """
    parts = [_INTRO]

    for beacon in beacons:
        parts.append(f"\n**{beacon.name}** (`{beacon.tag}`): {beacon.description}\n")
        parts.append("Directions:\n")
        for d in beacon.directions:
            parts.append(f"  - {d.name} (`{d.tag}`): {d.description}\n")

    if projects:
        parts.append("\n### Available Projects:\n")
        for project in projects:
            parts.append(f"- {project.name} (keywords: {', '.join(project.keywords)})\n")

    parts.append(_ASSESSMENT)
    parts.append(f'\n## Task to Analyze\n"{description}"\n')
    parts.append(_INSTRUCTIONS)

    return "".join(parts)


def parse_suggestion_response(text: str) -> Suggestion:
    """
    Parse model output into a Suggestion.

    Raises:
        ProviderError: If the text holds no decodable JSON object
    """
    data = extract_json_object(text or "")
    if data is None:
        snippet = (text or "").strip()[:200]
        raise ProviderError(f"no valid JSON found in response: {snippet!r}")
    return Suggestion.from_dict(data)
