# Tradelog_app/models/trade.py

from Tradelog_app.extensions import db

OPTION_TYPES = ('Call', 'Put')


class Trade(db.Model):
    __tablename__ = 'trades'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
        nullable=False, index=True,
    )
    trade_date = db.Column(db.Date, nullable=False, index=True)
    symbol = db.Column(db.String(50), nullable=False)
    strike_price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    option_type = db.Column(db.Enum(*OPTION_TYPES, name='option_type'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False)
    buy_price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    sell_price = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    # client-computed, stored as sent
    pl = db.Column(db.Numeric(12, 2, asdecimal=False), nullable=False)
    return_pct = db.Column(db.Numeric(6, 2, asdecimal=False), nullable=False)
    created_at = db.Column(db.DateTime, server_default=db.func.current_timestamp())

    def apply(self, fields):
        """Overwrite every mutable column from validated fields"""
        self.trade_date = fields['trade_date']
        self.symbol = fields['symbol']
        self.strike_price = fields['strike_price']
        self.option_type = fields['option_type']
        self.quantity = fields['quantity']
        self.buy_price = fields['buy_price']
        self.sell_price = fields['sell_price']
        self.pl = fields['pl']
        self.return_pct = fields['return_pct']

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'trade_date': self.trade_date.isoformat(),
            'symbol': self.symbol,
            'strike_price': self.strike_price,
            'option_type': self.option_type,
            'quantity': self.quantity,
            'buy_price': self.buy_price,
            'sell_price': self.sell_price,
            'pl': self.pl,
            'return_pct': self.return_pct,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
