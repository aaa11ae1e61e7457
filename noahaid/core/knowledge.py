from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from noahaid.core.highlighter import CLOSE_MARK, OPEN_MARK


class Severity(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


@dataclass(frozen=True)
class Topic:
    id: str
    title: str
    severity: Severity
    keywords: tuple[str, ...]
    steps: tuple[str, ...]


FIRST_AID_TOPICS: tuple[Topic, ...] = (
    Topic(
        id="bleeding",
        title="Severe bleeding",
        severity=Severity.high,
        keywords=(
            "bleed",
            "bleeds",
            "bleeding",
            "cut",
            "cuts",
            "wound",
            "wounds",
            "hemorrhage",
            "hemorrhages",
            "injury",
            "injuries",
            "laceration",
            "lacerations",
        ),
        steps=(
            "Call emergency services immediately if bleeding is severe or spurting.",
            "Wear gloves if available.",
            "Apply firm, direct pressure to the wound with a clean cloth or bandage.",
            "Elevate the injured area above heart level if possible.",
            "Keep the person calm and monitor for signs of shock.",
            "Do not remove embedded objects — apply pressure around them.",
        ),
    ),
    Topic(
        id="choking",
        title="Choking (conscious adult)",
        severity=Severity.high,
        keywords=(
            "choke",
            "chokes",
            "choking",
            "airway",
            "airways",
            "can't breathe",
            "cannot breathe",
            "can't cough",
            "cannot cough",
            "obstruction",
            "obstructed",
        ),
        steps=(
            "Ask 'Are you choking?' If they can cough or speak, encourage forceful coughing.",
            "If they cannot breathe, call emergency services immediately.",
            "Give 5 back blows between the shoulder blades.",
            "If still obstructed, give up to 5 abdominal thrusts (Heimlich maneuver).",
            "Alternate back blows and abdominal thrusts until object is dislodged or person becomes unconscious.",
        ),
    ),
    Topic(
        id="burn",
        title="Thermal burn (minor)",
        severity=Severity.medium,
        keywords=("burn", "burns", "scald", "scalds", "hot", "thermal", "blister", "blisters"),
        steps=(
            "Remove the person from the source of heat.",
            "Cool the burn with running cool (not icy) water for 10-20 minutes.",
            "Remove tight items (rings, watch) from the burned area.",
            "Cover loosely with sterile, non-adhesive dressing.",
            "Do not apply creams, oils, or ice directly to the burn.",
        ),
    ),
    Topic(
        id="cpr",
        title="CPR (adult)",
        severity=Severity.high,
        keywords=(
            "cpr",
            "no pulse",
            "not breathing",
            "cardiac arrest",
            "heart stopped",
            "resuscitation",
            "heart attack",
            "unconscious",
        ),
        steps=(
            "Call emergency services immediately.",
            "Check responsiveness and breathing. If not breathing, start CPR.",
            "Place hands in the center of chest and give 30 chest compressions at 100-120/min, depth ~5-6 cm.",
            "After 30 compressions give 2 rescue breaths if trained.",
            "Continue cycles until help arrives or person recovers.",
        ),
    ),
)


def validate_topics(topics: Sequence[Topic]) -> None:
    seen: set[str] = set()
    for topic in topics:
        if topic.id in seen:
            raise ValueError(f"Duplicate topic id: {topic.id}")
        seen.add(topic.id)
        if not topic.keywords:
            raise ValueError(f"Topic {topic.id} has no keywords")
        if not topic.steps:
            raise ValueError(f"Topic {topic.id} has no steps")
        for keyword in topic.keywords:
            if not keyword.strip():
                raise ValueError(f"Topic {topic.id} has a blank keyword")
            if OPEN_MARK in keyword or CLOSE_MARK in keyword:
                raise ValueError(f"Topic {topic.id} keyword contains a reserved character")
            if keyword != keyword.lower():
                raise ValueError(f"Topic {topic.id} keyword is not lowercase: {keyword}")


def get_topic(topic_id: str, topics: Sequence[Topic] = FIRST_AID_TOPICS) -> Topic:
    for topic in topics:
        if topic.id == topic_id:
            return topic
    raise KeyError(topic_id)


validate_topics(FIRST_AID_TOPICS)
