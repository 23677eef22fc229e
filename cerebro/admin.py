from typing import List, Optional, Tuple
import hmac
import logging
import statsd
from cerebro.models import Submission
from cerebro.store import SessionTracker, SubmissionStore

log = logging.getLogger(__name__)

class Unauthorized(Exception):
    def __init__(self):
        super().__init__("Unauthorized")

class AdminService:
    """
    Dashboard access to stored submissions. Every call takes the token the
    caller presented and checks it against the configured admin token before
    touching the store; with no admin token configured nothing is readable.
    """

    def __init__(self, store: SubmissionStore, tracker: SessionTracker, metrics: statsd.StatsClient, admin_token: Optional[str]):
        self.store = store
        self.tracker = tracker
        self.metrics = metrics
        self.admin_token = admin_token

    def authorize(self, token: Optional[str]):
        if not self.admin_token or not token or not hmac.compare_digest(token.encode(), self.admin_token.encode()):
            self.metrics.incr("admin.unauthorized")
            raise Unauthorized

    def list_submissions(self, token: Optional[str], status: Optional[str] = None) -> Tuple[List[Submission], int]:
        self.authorize(token)
        return self.store.list_submissions(status)

    def update_status(self, token: Optional[str], submission_id: str, status: str) -> bool:
        self.authorize(token)
        updated = self.store.update_status(submission_id, status)
        if not updated:
            log.info("Status update for unknown submission %s ignored", submission_id)
        return updated

    def compute_stats(self, token: Optional[str]) -> dict:
        self.authorize(token)
        return {
            "total": self.store.count(),
            "new": self.store.count("new"),
            "reviewed": self.store.count("reviewed"),
            "funded": self.store.count("funded"),
            "sessions": self.tracker.count(),
            "universities": self.store.top_universities(10),
        }
