from sqlmodel import Session, select, func
from sqlalchemy.exc import IntegrityError
from typing import List, Optional, Tuple
import itertools
import json
import logging
import threading
import uuid
from cerebro.models import ChatSession, Submission, PROFILE_FIELDS, utcnow

log = logging.getLogger(__name__)

def flat_value(value):
    # only non-empty strings fit the flattened columns, raw_profile keeps the rest
    return value if isinstance(value, str) and value else None

class SessionTracker:
    def __init__(self, engine):
        self.engine = engine

    def touch(self, session_id: str, message_count: int) -> ChatSession:
        """Record activity for a chat session, creating it on first sight."""
        try:
            return self._upsert(session_id, message_count)
        except IntegrityError:
            # another request inserted the same session id first, the row exists now
            return self._upsert(session_id, message_count)

    def _upsert(self, session_id: str, message_count: int) -> ChatSession:
        with Session(self.engine) as session:
            chat_session = session.get(ChatSession, session_id)
            if chat_session is None:
                chat_session = ChatSession(id=session_id)
            chat_session.last_active_at = utcnow()
            chat_session.message_count = message_count

            session.add(chat_session)
            session.commit()
            session.refresh(chat_session)
            return chat_session

    def get(self, session_id: str) -> Optional[ChatSession]:
        with Session(self.engine) as session:
            return session.get(ChatSession, session_id)

    def all(self) -> List[ChatSession]:
        with Session(self.engine) as session:
            return session.exec(select(ChatSession).order_by(ChatSession.last_active_at.desc())).all()

    def count(self) -> int:
        with Session(self.engine) as session:
            return session.exec(select(func.count()).select_from(ChatSession)).one()

class SubmissionStore:
    def __init__(self, engine):
        self.engine = engine

        # continue numbering after rows left by a previous run
        with Session(self.engine) as session:
            last_seq = session.exec(select(func.max(Submission.seq))).one() or 0
        self._seq = itertools.count(last_seq + 1)
        self._seq_lock = threading.Lock()

    def create_submission(self, session_id: str, transcript=None, profile=None) -> str:
        """
        Persist a finished interview. Every call inserts a new row under a
        fresh id, so submitting the same session twice keeps both copies.
        """
        profile = profile if isinstance(profile, dict) else {}
        with self._seq_lock:
            seq = next(self._seq)

        submission = Submission(
            id=str(uuid.uuid4()),
            session_id=session_id,
            created_at=utcnow(),
            seq=seq,
            status="new",
            transcript=json.dumps(transcript or []),
            raw_profile=json.dumps(profile),
            **{field: flat_value(profile.get(field)) for field in PROFILE_FIELDS},
        )

        submission_id = submission.id
        with Session(self.engine) as session:
            session.add(submission)
            session.commit()

        log.info(
            "New submission: %s @ %s",
            flat_value(profile.get("full_name")) or "Unknown",
            flat_value(profile.get("university")) or "Unknown",
        )
        return submission_id

    def get_submission(self, submission_id: str) -> Optional[Submission]:
        with Session(self.engine) as session:
            return session.get(Submission, submission_id)

    def list_submissions(self, status: Optional[str] = None) -> Tuple[List[Submission], int]:
        query = select(Submission)
        if status:
            query = query.where(Submission.status == status)
        query = query.order_by(Submission.created_at.desc(), Submission.seq.desc())

        with Session(self.engine) as session:
            submissions = session.exec(query).all()
        return submissions, len(submissions)

    def update_status(self, submission_id: str, status: str) -> bool:
        with Session(self.engine) as session:
            submission = session.get(Submission, submission_id)
            if submission is None:
                return False

            submission.status = status
            session.add(submission)
            session.commit()
        return True

    def count(self, status: Optional[str] = None) -> int:
        query = select(func.count()).select_from(Submission)
        if status is not None:
            query = query.where(Submission.status == status)
        with Session(self.engine) as session:
            return session.exec(query).one()

    def top_universities(self, limit: int = 10) -> List[dict]:
        occurrences = func.count(Submission.id)
        query = (
            select(Submission.university, occurrences)
            .where(Submission.university != None)
            .group_by(Submission.university)
            .order_by(occurrences.desc())
            .limit(limit)
        )
        with Session(self.engine) as session:
            rows = session.exec(query).all()
        return [{"university": university, "count": count} for university, count in rows]
