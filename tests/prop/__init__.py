"""
Property-based tests for the 8086 decoder.

Hypothesis strategies generate well-formed encodings per opcode family so the
tests can check lengths, offsets and truncation behaviour on whole streams.
"""
