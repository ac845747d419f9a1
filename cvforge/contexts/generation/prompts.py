"""
Prompt templates for CV tailoring.
"""

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

SYSTEM_PROMPT = """\
You are an expert CV/resume writer. Your task is to create a professionally tailored CV \
based on the candidate's existing CV and a specific job offer.

Guidelines:
- Preserve all factual information from the original CV (name, contact, dates, companies, education).
- Rewrite the professional summary to directly address the job requirements.
- Reorganize and rephrase experience bullet points to highlight relevant skills and achievements.
- Use strong action verbs and quantified achievements where possible.
- Ensure skills section emphasizes technologies/competencies mentioned in the job offer.
- Keep the tone professional and concise.
- Do NOT fabricate experience or skills not present in the original CV.
- Format experience entries with company name, role, dates, and bullet points.
- If information is missing from the original CV, use an empty string rather than making things up."""

_USER_PROMPT_TEMPLATE = """\
Here is the candidate's existing CV:

---
{cv_text}
---

Here is the job offer they are applying for:

---
{job_offer}
---

Create a tailored CV that highlights the candidate's most relevant qualifications for this specific role."""


def build_tailoring_prompt(cv_text: str, job_offer: str) -> str:
    """
    Build the user prompt for tailoring a CV to a job offer.

    Args:
        cv_text: Text extracted from the candidate's existing CV
        job_offer: The job listing as pasted by the user

    Returns:
        User prompt string for the LLM
    """
    return _USER_PROMPT_TEMPLATE.format(cv_text=cv_text.strip(), job_offer=job_offer.strip())
