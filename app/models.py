"""
School Site Database Models
Pure SQLAlchemy models with no HTTP dependencies.
"""

from datetime import datetime
from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

TITLE_MAX_LENGTH = 200


class Schedule(db.Model):
    """
    A monthly class schedule published on the website.

    `images` is an ordered list of image URLs. The order is the display
    order chosen in the admin console and is stored exactly as written.
    """
    __tablename__ = 'schedules'

    id = db.Column(db.Integer, primary_key=True)

    # First day of the scheduled month
    month = db.Column(db.Date, nullable=False, index=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH))

    # JSON array of URL strings, never empty once persisted
    images = db.Column(db.JSON, nullable=False, default=list)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f'<Schedule {self.id} {self.month:%Y-%m}>'
