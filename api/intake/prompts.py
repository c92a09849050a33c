from __future__ import annotations

from .mapping import CandidateApplication
from .profile import LinkedInProfile


BRIEFING_SYSTEM = (
    "Du bist ein erfahrener Personalberater. Du schreibst kurze, sachliche "
    "Kandidaten-Briefings für Recruiter auf Deutsch. Erfinde keine Fakten; "
    "nutze ausschließlich die bereitgestellten Daten."
)

MAX_PROMPT_EXPERIENCES = 8
MAX_PROMPT_SKILLS = 20


def _line(label: str, value: str) -> str:
    return f"{label}: {value}" if value else f"{label}: (keine Angabe)"


def build_briefing_prompt(application: CandidateApplication, profile: LinkedInProfile) -> str:
    experience_lines = []
    for exp in profile.experiences[:MAX_PROMPT_EXPERIENCES]:
        line = f"- {exp.title or 'Rolle unbekannt'} bei {exp.company or 'unbekannt'}"
        if exp.duration:
            line += f" ({exp.duration})"
        if exp.description:
            line += f": {exp.description[:300]}"
        experience_lines.append(line)
    education_lines = [
        f"- {', '.join(p for p in (edu.degree, edu.school, edu.period) if p)}"
        for edu in profile.education
        if edu.school or edu.degree
    ]

    sections = [
        "Erstelle ein Briefing für das Erstgespräch mit folgendem Kandidaten.",
        "",
        "## Angaben aus der Terminbuchung",
        _line("Name", application.name),
        _line("Gesuchte Position", application.position),
        _line("Kündigungsfrist", application.notice_period),
        _line("Gesuchte Region", application.region),
        _line("Gehaltsvorstellung", application.salary),
        _line("Beschäftigungsverhältnis", ", ".join(application.employment_types)),
        _line("Arbeitszeit", application.work_time or ""),
        _line("Home-Office", application.work_location or ""),
        _line("Vertragsform", ", ".join(application.contract_forms)),
        "",
        "## LinkedIn-Profil",
        _line("Name", profile.full_name),
        _line("Headline", profile.headline),
        _line("Standort", profile.location),
        _line("Über mich", profile.summary),
        "Berufserfahrung:",
        "\n".join(experience_lines) or "(keine Angabe)",
        "Ausbildung:",
        "\n".join(education_lines) or "(keine Angabe)",
        _line("Skills", ", ".join(profile.skills[:MAX_PROMPT_SKILLS])),
        "",
        "## Format",
        "1. Kurzprofil (2-3 Sätze)",
        "2. Kernkompetenzen (Stichpunkte)",
        "3. Karriereverlauf und Wechselmotivation (Vermutung kennzeichnen)",
        "4. Passende Fragen für das Gespräch (3-5 Stichpunkte)",
        "Maximal 250 Wörter, keine Einleitung, kein Markdown außer Stichpunkten.",
    ]
    return "\n".join(sections)
