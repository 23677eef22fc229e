import re
from typing import List
from cerebro.models import Profile

# label as written by the model -> profile field
PROFILE_LABELS = {
    "University": "university",
    "Year": "year",
    "Major": "major",
    "Idea": "idea_title",
    "Problem Solved": "idea_desc",
    "What Makes It Unique": "uniqueness",
    "Current Stage": "stage",
    "Biggest Challenge": "challenge",
    "Email": "email",
}

NAME_PATTERN = re.compile(r"INNOVATOR PROFILE\s*[—–-]\s*(.+?)(?:\n|\*\*)", re.IGNORECASE)
EMAIL_PATTERN = re.compile(r"[\w.-]+@[\w.-]+\.\w+")

def label_pattern(label: str):
    return re.compile(re.escape(label) + r"[:\s]+(.+?)(?:\n|\Z)", re.IGNORECASE)

class ProfileExtractor:
    # this method should be overriden in the implementation
    def extract(self, text: str, messages: List) -> Profile:
        return Profile()

class RegexProfileExtractor(ProfileExtractor):
    """
    The model closes the interview with a formatted summary like

        **INNOVATOR PROFILE — Jane Doe**
        🏫 University: Howard University
        📚 Year / Major: Junior / Computer Science
        📧 Email: jane@example.com
        💡 Idea: ...

    The layout comes from free-form generation, so every label is looked up
    on its own and a missing label simply leaves that field empty.
    Nothing in here raises on bad input.
    """

    def __init__(self, labels: dict = PROFILE_LABELS):
        self.patterns = {field: label_pattern(label) for label, field in labels.items()}

    def get_field(self, text: str, field: str):
        match = self.patterns[field].search(text)
        if match is None:
            return None
        return match.group(1).strip() or None

    def get_full_name(self, text: str):
        match = NAME_PATTERN.search(text)
        if match is None:
            return None
        return match.group(1).replace("*", "").strip() or None

    @staticmethod
    def history_text(messages) -> str:
        if not isinstance(messages, (list, tuple)):
            return ""
        contents = []
        for message in messages:
            content = message.get("content") if isinstance(message, dict) else None
            # structured content blocks carry no searchable text here
            contents.append(content if isinstance(content, str) else "")
        return "\n".join(contents)

    def extract(self, text: str, messages: List) -> Profile:
        if not isinstance(text, str):
            text = ""

        fields = {field: self.get_field(text, field) for field in self.patterns}
        fields["full_name"] = self.get_full_name(text)

        if not fields.get("email"):
            email_match = EMAIL_PATTERN.search(self.history_text(messages))
            fields["email"] = email_match.group(0) if email_match else None

        return Profile(**fields)

default_extractor = RegexProfileExtractor()

def extract_profile(text: str, messages: List) -> Profile:
    return default_extractor.extract(text, messages)
