"""Pipeline stages — operations, balancing, layout.

Each stage consumes the previous stage's output in memory.  The stages
in order:

  operations  — normalized operation bulletin (parsing, validation)
  balancing   — machine count per operation from the production target
  layout      — section grouping and lane placement of every machine
"""
