"""
CV Forge - tailored CVs from an existing resume and a job offer

Turns the extracted text of a resume plus a job description into a structured,
tailored CV streamed from an LLM, and lays that CV out onto paginated PDF pages.

Architecture:
- Intake Context: PDF text extraction and input validation
- Generation Context: Prompting, streaming, and incremental structured-output parsing
- Rendering Context: Word-wrapping, pagination, PDF writing and verification
"""

__version__ = "0.1.0"
