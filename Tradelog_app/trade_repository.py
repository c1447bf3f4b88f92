# Tradelog_app/trade_repository.py

from flask import current_app

from .extensions import db
from .errors import NotFoundOrForbidden
from .models import Trade
from .validation import validate_trade_payload


class TradeRepository:
    """Owner-scoped trade persistence.

    A trade that does not exist and a trade owned by someone else are the
    same outcome (NotFoundOrForbidden) so ids of other users never leak.
    """

    @staticmethod
    def list_for_user(user_id):
        return Trade.query.filter_by(user_id=user_id)\
            .order_by(Trade.trade_date.desc(), Trade.id.desc())\
            .all()

    @staticmethod
    def _owned(user_id, trade_id):
        trade = Trade.query.filter_by(id=trade_id, user_id=user_id).first()
        if trade is None:
            raise NotFoundOrForbidden()
        return trade

    @staticmethod
    def create(user_id, payload):
        fields = validate_trade_payload(payload)
        trade = Trade(user_id=user_id)
        trade.apply(fields)
        try:
            db.session.add(trade)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info("Trade created", extra={'trade_id': trade.id, 'symbol': trade.symbol})
        return trade.id

    @classmethod
    def update(cls, user_id, trade_id, payload):
        fields = validate_trade_payload(payload)
        trade = cls._owned(user_id, trade_id)
        trade.apply(fields)
        try:
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info("Trade updated", extra={'trade_id': trade_id})

    @classmethod
    def delete(cls, user_id, trade_id):
        trade = cls._owned(user_id, trade_id)
        try:
            db.session.delete(trade)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        current_app.logger.info("Trade deleted", extra={'trade_id': trade_id})
