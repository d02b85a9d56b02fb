import re
from typing import NamedTuple

FREE_TEXT_MARKER = "_free"

BUILDING_SUFFIXES = {
    "_elem": "Elementary",
    "_ms": "Middle School",
    "_hs": "High School",
}
ALL_BUILDINGS = "All / N/A"

CATEGORY_LABELS = {
    "community": "School Community",
    "comm": "Communicating Effectively",
    "communication": "Communicating Effectively",
    "success": "Supporting Student Success",
    "advocacy": "Speaking Up for Every Child",
    "decision": "Decision Making",
    "safety": "School Safety",
}
OTHER_CATEGORY = "Other"

# base question id -> wording shown on the form
QUESTION_TEXT = {
    # School Community
    "community_welcomed": "Do you feel welcomed and included in your child's school community?",
    "community_events": "Have you attended any school events or volunteered at your child's school?",
    "community_meet_teacher": "Have you met with your child's teacher(s) to discuss your child's progress?",
    "community_respect_diversity": "Do you feel that your child's school respects and values the diversity of families?",
    "community_feedback_welcome": "Have you provided feedback to the school on how they can be more welcoming and inclusive?",
    "community_free": "Please share any additional thoughts about the school community.",
    # Communicating Effectively
    "comm_received_regular": "Have you received regular and clear communication from your child's school about events and activities?",
    "comm_with_teacher": "Have you communicated with your child's teacher about any concerns or questions you have?",
    "comm_conferences": "Have you attended any parent-teacher conferences or meetings?",
    "comm_provided_contact": "Have you provided your contact information to the school to ensure that you receive important updates?",
    "comm_feedback_improve": "Have you provided feedback to the school on how they can improve their communication with families?",
    "communication_free": "Please share any additional thoughts about communication with the school.",
    # Supporting Student Success
    "success_high_expectations": "Do you have high expectations for your child's academic success?",
    "success_talked_importance": "Have you talked with your child about the importance of education and the opportunities it can provide?",
    "success_extra_support": "Have you provided your child with additional resources or support to help them succeed?",
    "success_comm_teacher": "Have you communicated with your child's teacher about any academic concerns or challenges your child may be facing?",
    "success_free": "Please share any additional thoughts about supporting student success.",
    # Speaking Up for Every Child
    "advocacy_responsive": "Do you feel that your child's school is responsive to your concerns or questions?",
    "advocacy_for_child": "Have you advocated for your child's needs and interests with their school or teachers?",
    "advocacy_participated": "Have you participated in any school or community efforts to advocate for all children?",
    "advocacy_feedback_needs": "Have you provided feedback to the school on how they can better meet the needs of all children?",
    "advocacy_encourage_child": "Have you encouraged your child to speak up for themselves and their peers?",
    "advocacy_free": "Please share any additional thoughts about speaking up for every child.",
    # Decision Making
    "decision_participated": "Have you participated in any school decision-making processes or committees?",
    "decision_feedback_policies": "Have you provided feedback to the school on any policies or programs that affect your child or their classmates?",
    "decision_collab_staff": "Have you worked collaboratively with your child's teacher or school staff to address any issues or concerns?",
    "decision_support_leadership": "Have you supported your child in developing leadership skills and advocating for themselves and their peers?",
    "decision_free": "Please share any additional thoughts about decision making and collaboration.",
    # School Safety
    "safety_child_safe": "How safe do you feel your child is while at school?",
    "safety_notify_quickly": "How confident are you that you would be notified quickly if there were a safety concern or emergency at school?",
    "safety_physical_measures": "How confident are you in the school's physical safety measures (locked doors, visitor check-in, cameras, etc.)?",
    "safety_supervision": "Do you feel the school grounds are supervised adequately during arrival, dismissal, and lunch?",
    "safety_reporting": "Do you believe your child feels comfortable reporting bullying or unsafe behavior?",
    "safety_knows_who": "Does your child know who to go to if they are feeling unsafe or need help?",
    "safety_staff_trained": "How confident are you that staff are trained to respond appropriately in emergency situations?",
    "safety_free": "Please share any additional thoughts about school safety.",
}


class QuestionKey(NamedTuple):
    key: str
    question_id: str
    category: str
    building: str
    is_free_text: bool

    @property
    def category_label(self) -> str:
        return CATEGORY_LABELS.get(self.category, OTHER_CATEGORY)


def parse_question_key(key: str) -> QuestionKey:
    """
    Split a flat payload key into its parts, e.g.
    ``safety_child_safe_elem`` -> question ``safety_child_safe``, category
    ``safety``, building ``Elementary``. The building suffix is stripped
    before the free-text marker is looked for, so ``safety_free_hs`` is the
    high school variant of the ``safety_free`` text question.
    """
    base = key
    building = ALL_BUILDINGS
    for suffix, label in BUILDING_SUFFIXES.items():
        if key.endswith(suffix) and len(key) > len(suffix):
            base = key[: -len(suffix)]
            building = label
            break

    return QuestionKey(
        key=key,
        question_id=base,
        category=base.split("_")[0],
        building=building,
        is_free_text=base.endswith(FREE_TEXT_MARKER),
    )


def question_label(key: str) -> str:
    base = parse_question_key(key).question_id
    if base in QUESTION_TEXT:
        return QUESTION_TEXT[base]
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), base.replace("_", " "))
