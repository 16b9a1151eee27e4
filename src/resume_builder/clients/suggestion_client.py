"""Mock writing assistant: canned, job-aware suggestions after a short delay."""

from __future__ import annotations

import asyncio
import logging

from resume_builder.models.job import JobDetails
from resume_builder.models.suggestion import Suggestion

logger = logging.getLogger(__name__)

QUICK_PROMPTS = (
    "Improve this section",
    "Make it more quantifiable",
    "Add relevant keywords",
    "Make it more concise",
)

SECTION_TIPS: dict[str, tuple[str, ...]] = {
    "summary": (
        "Keep it 2-3 sentences and focus on your top achievements",
        "Include keywords from the job description",
        "Quantify your impact with specific numbers or percentages",
    ),
    "experience": (
        "Start each bullet with a strong action verb",
        "Include quantifiable results (increased sales by 25%)",
        "Focus on achievements, not just responsibilities",
    ),
    "education": (
        "Include relevant coursework if you're a recent graduate",
        "Add GPA if it's 3.5 or higher",
        "Mention relevant academic projects or honors",
    ),
    "skills": (
        "Organize skills by category (Technical, Soft Skills, etc.)",
        "Only include skills you can confidently demonstrate",
        "Match skills mentioned in the job description",
    ),
    "projects": (
        "Include 2-3 most relevant projects",
        "Explain the problem you solved and the impact",
        "List technologies or tools used",
    ),
    "certifications": (
        "Include expiration dates for time-sensitive certifications",
        "Prioritize industry-relevant certifications",
        "Add certification numbers if applicable",
    ),
}

EXPERIENCE_BULLETS = [
    "Led cross-functional team of 8 developers to deliver 3 major product releases, "
    "resulting in 40% increase in user engagement",
    "Implemented automated testing protocols that reduced bug reports by 60% "
    "and improved deployment speed by 2x",
    "Collaborated with stakeholders to define product requirements, leading to "
    "successful launch of 2 new features used by 10K+ users",
]

SUGGESTED_SKILLS = [
    "JavaScript", "Python", "React", "Node.js", "Git",
    "Docker", "AWS", "Leadership", "Strategic Planning", "Problem Solving",
]


def section_tips(section: str) -> tuple[str, ...]:
    """Writing tips for ``section``; empty for sections without any."""
    return SECTION_TIPS.get(section, ())


def greeting(section: str, job: JobDetails) -> str:
    return (
        f"Hi! I'm your AI resume assistant. I can help you improve your {section} "
        f"section for the {job.title} position. What would you like to work on?"
    )


class SuggestionClient:
    """Returns canned suggestions keyed by section.

    The prompt text only gates the call; the reply depends on the section
    and the job details.
    """

    def __init__(self, delay: float = 1.5):
        self.delay = delay

    async def suggest(self, section: str, prompt: str, job: JobDetails) -> Suggestion | None:
        if not prompt.strip():
            return None
        logger.debug("Mock suggestion for %s, sleeping %.1fs", section, self.delay)
        await asyncio.sleep(self.delay)
        return build_suggestion(section, job)


def build_suggestion(section: str, job: JobDetails) -> Suggestion:
    industry = job.industry.lower()
    role = job.title.lower()
    if section == "summary":
        text = (
            f"Results-driven professional with 5+ years of experience in {industry}, "
            f"specializing in {role} responsibilities. Proven track record of delivering "
            "high-impact projects that increased efficiency by 30% and reduced costs by "
            "$50K annually. Seeking to leverage expertise in strategic planning and team "
            "leadership to drive growth at a forward-thinking organization."
        )
        content = (
            f"Based on your {job.title} target role, here's an improved summary:\n\n"
            f'"{text}"\n\n'
            "Key improvements:\n"
            "• Added specific years of experience\n"
            "• Included quantifiable achievements\n"
            "• Mentioned relevant industry keywords\n"
            "• Tailored to your target role"
        )
        return Suggestion(content=content, suggestion=text)

    if section == "experience":
        content = (
            "Here are improved bullet points for your current experience:\n\n"
            + "\n".join(f"• {b}" for b in EXPERIENCE_BULLETS)
            + "\n\nKey improvements:\n"
            "• Started with strong action verbs (Led, Implemented, Collaborated)\n"
            "• Added specific numbers and quantifiable results\n"
            "• Focused on achievements rather than day-to-day tasks"
        )
        return Suggestion(content=content, suggestion=list(EXPERIENCE_BULLETS))

    if section == "skills":
        content = (
            f"Here's an optimized skills section tailored for {job.title}:\n\n"
            "**Technical Skills**\n"
            "• Programming: JavaScript, Python, React, Node.js\n"
            "• Tools: Git, Docker, AWS, Jira, Figma\n"
            "• Databases: PostgreSQL, MongoDB, Redis\n\n"
            "**Soft Skills**\n"
            "• Leadership & Team Management\n"
            "• Strategic Planning & Problem Solving\n"
            "• Cross-functional Collaboration\n\n"
            "Key improvements:\n"
            "• Organized by categories for better readability\n"
            "• Prioritized skills mentioned in job descriptions\n"
            "• Balanced technical and soft skills"
        )
        return Suggestion(content=content, suggestion=list(SUGGESTED_SKILLS))

    return Suggestion(
        content=(
            f"I can help you improve your {section} section. "
            "What specific aspect would you like to focus on?"
        ),
        suggestion=None,
    )
