"""SpanTrans: translate or rephrase a span of text with DeepL and review it before applying."""

__version__ = "0.1.0"
