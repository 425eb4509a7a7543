"""Core segmentation and layout modules.

WHY: The core package holds the two algorithms everything else is built
on, the grapheme boundary machine and the line-layout stepper, together
with the value types they exchange. Formatters and the CLI only consume
what these modules produce.

HOW: props.py and ir.py define the data types, classify.py looks up
grapheme properties, machine.py segments clusters, measure.py turns
clusters into symbols, layout.py steps symbols into spans, and
assembler.py drives them over whole texts.

RULES:
- machine.transition() and layout.step() are pure; keep them that way
- ir.py and props.py are the contract; change with care
- No module in core prints or reads configuration
"""
