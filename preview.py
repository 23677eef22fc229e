from cerebro import config
from cerebro.store import SessionTracker, SubmissionStore
from sqlmodel import create_engine, SQLModel
import json

def main(engine=None, status=None):
    if engine is None:
        engine = create_engine(config.DATABASE_URL)
    SQLModel.metadata.create_all(engine)

    tracker = SessionTracker(engine)
    store = SubmissionStore(engine)

    for chat_session in tracker.all():
        print(chat_session)
    print("------------")

    submissions, total = store.list_submissions(status)
    for submission in submissions:
        print(f"{submission.id} [{submission.status}] {submission.full_name or 'Unknown'} @ {submission.university or 'Unknown'}")
        for message in json.loads(submission.transcript):
            if isinstance(message, dict):
                print(f"  {message.get('role', '?')}: {message.get('content', '')}")
            else:
                print(f"  {message}")
        print()
    print(f"{total} submission(s)")

if __name__ == "__main__":
    main()
