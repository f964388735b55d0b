"""Credit-report parsing: assistant markdown to a StructuredReport.

Submodules:
  patterns   -- compiled regex patterns and heading constants
  sections   -- heading index and section extraction
  tables     -- pipe-table parser
  bullets    -- hyphen-bullet parser
  schema     -- StructuredReport and typed row records (Pydantic)
  assembler  -- parse_report() entry point
  payload    -- JSON report extraction from assistant output, with markdown fallback
"""
