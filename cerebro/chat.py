from typing import List, Optional
from dataclasses import dataclass
import logging
import statsd
from cerebro.assistant import LLMAssistant
from cerebro.extractor import ProfileExtractor, RegexProfileExtractor
from cerebro.models import Profile
from cerebro.prompts import PROFILE_COMPLETE_MARKER
from cerebro.store import SessionTracker

log = logging.getLogger(__name__)

class MissingParameter(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

@dataclass
class ChatReply:
    reply: str
    profile_complete: bool
    profile: Optional[Profile]

    def to_dict(self) -> dict:
        return {
            "reply": self.reply,
            "profileComplete": self.profile_complete,
            "profile": self.profile.model_dump() if self.profile is not None else None,
        }

def strip_marker(reply: str, marker: str = PROFILE_COMPLETE_MARKER):
    complete = marker in reply
    return reply.replace(marker, "").strip(), complete

class ChatProxy:
    def __init__(self, assistant: LLMAssistant, tracker: SessionTracker, metrics: statsd.StatsClient, extractor: ProfileExtractor = None):
        self.assistant = assistant
        self.tracker = tracker
        self.metrics = metrics
        self.extractor = extractor or RegexProfileExtractor()

    def handle_chat(self, session_id: str, messages: List) -> ChatReply:
        if not session_id or not isinstance(session_id, str) or not isinstance(messages, list):
            raise MissingParameter("Missing sessionId or messages")

        self.metrics.incr("chat")
        self.tracker.touch(session_id, len(messages))

        reply = self.assistant.get_completion(messages)
        clean_reply, profile_complete = strip_marker(reply)

        profile = None
        if profile_complete:
            self.metrics.incr("chat.profile_complete")
            profile = self.extractor.extract(clean_reply, messages)
            log.info("Profile complete for session %s", session_id)

        return ChatReply(reply=clean_reply, profile_complete=profile_complete, profile=profile)
