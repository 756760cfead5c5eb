"""Readable names for MotiveWave study and drawing-tool identifiers."""

NAMESPACE_SEPARATOR = ";"

# Study ids as they appear in figure "sid" fields
STUDY_NAMES = {
    "MA": "Moving Average",
    "SMA": "Simple Moving Average",
    "EMA": "Exponential Moving Average",
    "WMA": "Weighted Moving Average",
    "VWAP": "VWAP",
    "ANCHORED_VWAP": "Anchored VWAP",
    "BOLLINGER_BANDS": "Bollinger Bands",
    "KELTNER_CHANNELS": "Keltner Channels",
    "DONCHIAN_CHANNELS": "Donchian Channels",
    "ICHIMOKU": "Ichimoku Cloud",
    "RSI": "Relative Strength Index",
    "MACD": "MACD",
    "STOCHASTIC": "Stochastic Oscillator",
    "CCI": "Commodity Channel Index",
    "ATR": "Average True Range",
    "ADX": "Average Directional Index",
    "VOLUME": "Volume",
    "VOLUME_PROFILE": "Volume Profile",
    "VOLUME_IMBALANCE": "Volume Imbalance",
    "CUMULATIVE_DELTA": "Cumulative Delta",
    "FOOTPRINT": "Footprint",
    "HEATMAP": "Order Book Heatmap",
    "DOM_HISTORY": "DOM History",
    "PIVOT_POINTS": "Pivot Points",
    "OPENING_RANGE": "Opening Range",
    "PREV_DAY_HL": "Previous Day High/Low",
    "SESSION_HL": "Session High/Low",
    "TPO_PROFILE": "TPO Profile",
    "PARABOLIC_SAR": "Parabolic SAR",
    "SUPERTREND": "SuperTrend",
}

# Drawing tools and chart-element defaults
DRAWING_NAMES = {
    "TREND_LINE": "Trend Line",
    "RAY": "Ray",
    "EXTENDED_LINE": "Extended Line",
    "HORIZONTAL_LINE": "Horizontal Line",
    "HORIZONTAL_RAY": "Horizontal Ray",
    "VERTICAL_LINE": "Vertical Line",
    "PRICE_LINE": "Price Line",
    "PRICE_LABEL": "Price Label",
    "RECTANGLE": "Rectangle",
    "ELLIPSE": "Ellipse",
    "TRIANGLE": "Triangle",
    "ARROW": "Arrow",
    "TEXT": "Text Note",
    "CALLOUT": "Callout",
    "PARALLEL_CHANNEL": "Parallel Channel",
    "REGRESSION_CHANNEL": "Regression Channel",
    "FIB_RETRACEMENT": "Fibonacci Retracement",
    "FIB_EXTENSION": "Fibonacci Extension",
    "FIB_TIME_ZONES": "Fibonacci Time Zones",
    "FIB_FAN": "Fibonacci Fan",
    "GANN_FAN": "Gann Fan",
    "PITCHFORK": "Andrews Pitchfork",
    "ELLIOTT_IMPULSE": "Elliott Impulse Wave",
    "ELLIOTT_CORRECTION": "Elliott Corrective Wave",
    "MEASURE": "Measure Tool",
    "RISK_REWARD": "Risk/Reward",
    "CROSSHAIR": "Crosshair",
    "ORDER_LINE": "Order Line",
    "POSITION_LINE": "Position Line",
}


def trailing_segment(identifier: str) -> str:
    """Strip a ``"<namespace>;"`` prefix from an identifier."""
    return str(identifier).rsplit(NAMESPACE_SEPARATOR, 1)[-1]


def readable(text: str) -> str:
    """``"custom_study_x"`` -> ``"Custom Study X"``."""
    return " ".join(word.capitalize() for word in str(text).replace("_", " ").split())


def display_name(identifier: str) -> str:
    segment = trailing_segment(identifier)
    if segment in STUDY_NAMES:
        return STUDY_NAMES[segment]
    if segment in DRAWING_NAMES:
        return DRAWING_NAMES[segment]
    return readable(segment)


def is_drawing(identifier: str) -> bool:
    segment = trailing_segment(identifier)
    return segment not in STUDY_NAMES and segment in DRAWING_NAMES
