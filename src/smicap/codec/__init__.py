"""SAMI caption codec: story segmentation, encoding, and decoding.

Encoder and decoder share only the document format; neither depends on the other.
"""
from smicap.codec.segmenter import segment_story, split_sentences, wrap_sentence
from smicap.codec.encoder import LINE_BREAK, encode_lines, escape_text, plan_events, render_document
from smicap.codec.decoder import clean_payload, decode_document

__all__ = [
    "segment_story",
    "split_sentences",
    "wrap_sentence",
    "LINE_BREAK",
    "encode_lines",
    "escape_text",
    "plan_events",
    "render_document",
    "clean_payload",
    "decode_document",
]
