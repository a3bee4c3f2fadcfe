"""Reward catalog model."""

import uuid

from storage.records import RewardRecord

from . import db


class Reward(db.Model):
    __tablename__ = "rewards"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    cost = db.Column(db.Integer, nullable=False)
    category = db.Column(db.String(50), nullable=False)

    def to_record(self) -> RewardRecord:
        return RewardRecord(
            id=self.id,
            name=self.name,
            description=self.description,
            cost=self.cost,
            category=self.category,
        )
