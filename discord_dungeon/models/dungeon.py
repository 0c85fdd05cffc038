from .base import db


class DungeonSession(db.Model):
    __tablename__ = "dungeon_sessions"
    id = db.Column(db.Integer, primary_key=True)
    # Not unique: lookups treat more than one match as corruption and say so.
    thread_key = db.Column(db.String(64), nullable=False, index=True)
    creator = db.Column(db.Text(), nullable=False)
    companions = db.Column(db.Text(), nullable=False, default="")
    cost_gp = db.Column(db.Integer, nullable=False)
    paid = db.Column(db.Boolean(), nullable=False, default=False)
    prompt = db.Column(db.Text(), nullable=False)
    engine_session_id = db.Column(db.String(64), nullable=True)
    created = db.Column(db.DateTime, nullable=False, default=db.func.now())
    updated = db.Column(db.DateTime, nullable=False, default=db.func.now())


class DungeonStoryItem(db.Model):
    __tablename__ = "dungeon_story_items"
    id = db.Column(db.Integer, primary_key=True)
    session_id = db.Column(
        db.Integer, db.ForeignKey("dungeon_sessions.id"), nullable=False, index=True
    )
    kind = db.Column(db.String(16), nullable=False)  # Input, Output
    author = db.Column(db.Text(), nullable=True)
    value = db.Column(db.Text(), nullable=False)
    created = db.Column(db.DateTime, nullable=False, default=db.func.now())
