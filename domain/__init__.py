"""Describes the mixology domain. Centres around the `GenerationContext`.

Why is this hard?

- A drink is a pure function of who asked and when they were born.
  Same name, same date, same generator, same drink. Every time.
- Except when a language model is configured. Then the drink is whatever the
  model says, squeezed into the same shape.
- Votes are counted in a spreadsheet. Spreadsheets do not do transactions.

Should be able to fake the model and the spreadsheet.

The generators never see either of them.
"""
