import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

ACTION_VERBS = [
    "achieved", "built", "created", "delivered", "designed", "developed", "improved",
    "increased", "launched", "led", "managed", "optimized", "reduced", "resolved",
    "streamlined", "implemented",
]
RESUME_SECTIONS = ["summary", "experience", "education", "skills"]
JOB_TYPES = ["full-time", "part-time", "contract"]


class AIServiceError(Exception):
    """The AI provider could not produce a usable answer."""


class AIService:
    """Thin client for an OpenAI-compatible chat-completions endpoint."""

    def __init__(self, api_key: str, base_url: str = "https://api.x.ai/v1",
                 model: str = "grok-2-1212", timeout: float = 30):
        self.api_url = f"{base_url.rstrip('/')}/chat/completions"
        self.headers = {"Authorization": f"Bearer {api_key}"}
        self.model = model
        self.timeout = timeout
        self.enabled = bool(api_key)

    def complete(self, system_prompt: str, user_content: str) -> str:
        if not self.enabled:
            raise AIServiceError("AI provider is not configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content},
            ],
        }
        try:
            response = requests.post(self.api_url, headers=self.headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()["choices"][0]["message"]["content"] or ""
        except (requests.RequestException, KeyError, IndexError, ValueError) as e:
            raise AIServiceError(str(e)) from e

    # --- resume builder ---

    def enhance_resume(self, content: str) -> str:
        try:
            return self.complete(
                "You are an expert resume writer. Enhance the given resume content while "
                "maintaining professionalism and highlighting key achievements.",
                content,
            )
        except AIServiceError as e:
            raise AIServiceError(f"Failed to enhance resume: {e}") from e

    def generate_bullet(self, role: str) -> str:
        try:
            bullet = self.complete(
                "Write one concise, quantified resume bullet point for the given role. "
                "Start with an action verb. Reply with the bullet text only.",
                role,
            )
        except AIServiceError as e:
            raise AIServiceError(f"Failed to generate bullet point: {e}") from e
        return bullet.strip().lstrip("-•* ").strip()

    def suggest_skills(self, job_description: str) -> List[str]:
        try:
            reply = self.complete(
                "Extract relevant skills from the job description. Return them as a comma-separated list.",
                job_description,
            )
        except AIServiceError as e:
            raise AIServiceError(f"Failed to suggest skills: {e}") from e
        return [skill.strip() for skill in reply.split(",") if skill.strip()]

    def generate_job_description(self, title: str, requirements: str) -> str:
        try:
            return self.complete(
                "Generate a professional job description based on the title and requirements provided.",
                f"Title: {title}\nRequirements: {requirements}",
            )
        except AIServiceError as e:
            raise AIServiceError(f"Failed to generate job description: {e}") from e

    def analyze_resume(self, content: str) -> Dict[str, Any]:
        """
        Score resume content.

        Category scores are computed locally so the result is stable; only the
        written suggestions come from the model, with local ones as a fallback.
        Returns: {total, categories, suggestions}
        """
        categories = score_categories(content)
        total = round(sum(c["score"] for c in categories) / len(categories)) if categories else 0

        try:
            reply = self.complete(
                "You review resumes. Give 3 to 5 short improvement suggestions, one per line. "
                "Prefix strengths with a check mark (✓).",
                content,
            )
            suggestions = [line.strip().lstrip("-•* ").strip() for line in reply.splitlines() if line.strip()]
        except AIServiceError as e:
            logger.warning("Falling back to local resume suggestions: %s", e)
            suggestions = []

        if not suggestions:
            suggestions = local_suggestions(categories)

        return {"total": total, "categories": categories, "suggestions": suggestions}

    # --- job post parsing (ingestion) ---

    def parse_job_post(self, text: str) -> Dict[str, Any]:
        """
        Parse a social-media job post into job fields.
        Returns: {title, company, location, requirements, type, confidence}
        """
        prompt = f"""
        Extract the job posting details from this social media post.

        Post: {text[:1000]}

        Respond in this JSON format:
        {{
            "title": "Job title or null if unclear",
            "company": "Company name or null if unclear",
            "location": "Location or Remote, null if unclear",
            "requirements": "Key requirements, comma separated",
            "type": "full-time, part-time or contract",
            "confidence": 0.75
        }}
        """
        try:
            reply = self.complete("You extract structured job postings from short texts.", prompt)
            parsed = self._parse_ai_response(reply)
            if parsed is not None:
                return parsed
        except AIServiceError as e:
            logger.warning("AI job parsing failed, using fallback: %s", e)
        return self._fallback_parsing(text)

    def _parse_ai_response(self, ai_response: str) -> Optional[Dict[str, Any]]:
        json_start = ai_response.find("{")
        json_end = ai_response.rfind("}") + 1
        if json_start < 0 or json_end <= json_start:
            return None
        try:
            data = json.loads(ai_response[json_start:json_end])
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None

        result = {}
        for field in ("title", "company", "location", "requirements"):
            value = data.get(field)
            result[field] = None if value in (None, "", "null") else str(value).strip()
        job_type = str(data.get("type") or "").lower()
        result["type"] = job_type if job_type in JOB_TYPES else "full-time"
        try:
            result["confidence"] = max(0.0, min(1.0, float(data.get("confidence") or 0.0)))
        except (TypeError, ValueError):
            result["confidence"] = 0.0

        # Missing core fields make the parse unusable regardless of self-reported confidence
        if not result["title"] or not result["company"]:
            result["confidence"] = min(result["confidence"], 0.3)
        result["location"] = result["location"] or "Remote"
        result["requirements"] = result["requirements"] or ""
        return result

    def _fallback_parsing(self, text: str) -> Dict[str, Any]:
        """Regex parsing when the model is unavailable; never confident enough to publish."""
        title_patterns = [
            r"hiring\s+(?:an?\s+)?([A-Za-z][A-Za-z /+-]{2,40}?)(?:\s+(?:at|in|to|for)\b|[.!,\n]|$)",
            r"looking for\s+(?:an?\s+)?([A-Za-z][A-Za-z /+-]{2,40}?)(?:\s+(?:at|in|to|for)\b|[.!,\n]|$)",
        ]
        company_patterns = [r"\bat\s+@?([A-Z][A-Za-z0-9&.]+(?:\s[A-Z][A-Za-z0-9&.]+)*)"]
        location_patterns = [r"\b(remote)\b", r"\bin\s+([A-Z][a-zA-Z]+(?:\s[A-Z][a-zA-Z]+)*)"]

        def first_match(patterns, flags=0):
            for pattern in patterns:
                match = re.search(pattern, text, flags)
                if match:
                    return match.group(1).strip()
            return None

        title = first_match(title_patterns, re.IGNORECASE)
        company = first_match(company_patterns)
        location = first_match(location_patterns, re.IGNORECASE)
        if location and location.lower() == "remote":
            location = "Remote"

        lowered = text.lower()
        job_type = next((t for t in JOB_TYPES if t in lowered), "full-time")
        found = [v for v in (title, company, location) if v]

        return {
            "title": title,
            "company": company,
            "location": location or "Remote",
            "requirements": "",
            "type": job_type,
            "confidence": round(0.15 * len(found) + (0.05 if title else 0.0), 2),
        }


def score_categories(content: str) -> List[Dict[str, Any]]:
    lowered = content.lower()
    lines = [line for line in content.splitlines() if line.strip()]

    verbs_found = sum(1 for verb in ACTION_VERBS if re.search(rf"\b{verb}\b", lowered))
    verbs_total = 5
    quantified = sum(1 for line in lines if re.search(r"\d", line))
    quantified_total = 5
    sections_found = sum(1 for section in RESUME_SECTIONS if section in lowered)

    def category(name, count, total):
        count = min(count, total)
        return {"name": name, "count": count, "total": total, "score": round(100 * count / total)}

    return [
        category("Action Verbs", verbs_found, verbs_total),
        category("Quantified Results", quantified, quantified_total),
        category("Sections", sections_found, len(RESUME_SECTIONS)),
    ]


def local_suggestions(categories: List[Dict[str, Any]]) -> List[str]:
    advice = {
        "Action Verbs": "Start more bullet points with strong action verbs such as led, built or improved.",
        "Quantified Results": "Add numbers to your achievements (percentages, revenue, team size).",
        "Sections": "Include summary, experience, education and skills sections.",
    }
    suggestions = []
    for category in categories:
        if category["count"] >= category["total"]:
            suggestions.append(f"✓ {category['name']} look strong.")
        else:
            suggestions.append(advice[category["name"]])
    return suggestions
