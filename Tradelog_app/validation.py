# Tradelog_app/validation.py
"""
Request payload validation for credentials and trades.

Trade payloads arrive in the dashboard's camelCase shape and leave as the
column-named dict that ``Trade.apply`` expects.
"""

import math
import re
from datetime import date

from .errors import ValidationError
from .models.trade import OPTION_TYPES

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
EMAIL_MAX_LENGTH = 100
SYMBOL_MAX_LENGTH = 50

# payload key -> column name
TRADE_FIELDS = {
    'date': 'trade_date',
    'symbol': 'symbol',
    'strikePrice': 'strike_price',
    'optionType': 'option_type',
    'quantity': 'quantity',
    'buyPrice': 'buy_price',
    'sellPrice': 'sell_price',
    'pl': 'pl',
    'returnPct': 'return_pct',
}

POSITIVE_PRICE_FIELDS = ('strikePrice', 'buyPrice', 'sellPrice')
SIGNED_FIELDS = ('pl', 'returnPct')

# largest magnitude each column holds: Numeric(10,2), (12,2), (6,2), 32-bit INT
FIELD_LIMITS = {
    'strikePrice': 99999999.99,
    'buyPrice': 99999999.99,
    'sellPrice': 99999999.99,
    'pl': 9999999999.99,
    'returnPct': 9999.99,
    'quantity': 2147483647,
}


def require_json_object(data):
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def validate_email(email):
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required")
    email = email.strip()
    if len(email) > EMAIL_MAX_LENGTH or not EMAIL_RE.match(email):
        raise ValidationError("Email is not valid")
    return email


def validate_password(password, min_length=6):
    if not isinstance(password, str) or len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters")
    return password


def _to_number(field, value):
    # bool is an int subclass; "true" is never a price
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            raise ValidationError(f"{field} is out of range")
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except (ValueError, OverflowError):
            raise ValidationError(f"{field} must be a number")
    else:
        raise ValidationError(f"{field} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number")
    limit = FIELD_LIMITS.get(field)
    if limit is not None and abs(number) > limit:
        raise ValidationError(f"{field} must be at most {limit}")
    return number


def _to_positive_int(field, value):
    number = _to_number(field, value)
    if not number.is_integer():
        raise ValidationError(f"{field} must be a whole number")
    if number <= 0:
        raise ValidationError(f"{field} must be greater than 0")
    return int(number)


def _to_date(field, value):
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a YYYY-MM-DD date")
    try:
        return date.fromisoformat(value.strip().split('T')[0])
    except ValueError:
        raise ValidationError(f"{field} must be a YYYY-MM-DD date")


def validate_trade_payload(data):
    """Validate a create/update body and return column-named fields.

    Raises ValidationError naming the first offending field.
    """
    require_json_object(data)

    missing = [key for key in TRADE_FIELDS if data.get(key) is None or data.get(key) == '']
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")

    fields = {'trade_date': _to_date('date', data['date'])}

    symbol = data['symbol']
    if not isinstance(symbol, str) or not symbol.strip():
        raise ValidationError("symbol must be a non-empty string")
    symbol = symbol.strip().upper()
    if len(symbol) > SYMBOL_MAX_LENGTH:
        raise ValidationError(f"symbol must be at most {SYMBOL_MAX_LENGTH} characters")
    fields['symbol'] = symbol

    option_type = data['optionType']
    if option_type not in OPTION_TYPES:
        raise ValidationError(f"optionType must be one of: {', '.join(OPTION_TYPES)}")
    fields['option_type'] = option_type

    fields['quantity'] = _to_positive_int('quantity', data['quantity'])

    for key in POSITIVE_PRICE_FIELDS:
        number = _to_number(key, data[key])
        if number <= 0:
            raise ValidationError(f"{key} must be greater than 0")
        fields[TRADE_FIELDS[key]] = number

    for key in SIGNED_FIELDS:
        fields[TRADE_FIELDS[key]] = _to_number(key, data[key])

    return fields
