"""Pattern tables for expert validation.

Disqualification is data, not code: DISQUALIFICATION_RULES is an ordered
list of (reason, fields, patterns). The validator walks it top to bottom
after the article-subject check and reports the first rule that matches.
Fields name PersonMention attributes whose text is joined before matching.

The tables can be replaced at runtime with load_disqualification_rules(),
which reads the same shape from a JSON file:

    [
        {"reason": "politician", "fields": ["title", "affiliation"],
         "patterns": ["\\\\bsenator\\\\b"]},
        ...
    ]

All patterns are compiled with re.IGNORECASE unless listed in
CASE_SENSITIVE_PATTERNS.
"""

import json
from pathlib import Path
from typing import Dict, List, NamedTuple, Tuple, Union


class DisqualificationRule(NamedTuple):
    """One ordered disqualification rule."""

    reason: str
    fields: Tuple[str, ...]
    patterns: Tuple[str, ...]


POLITICIAN_PATTERNS: List[str] = [
    r"\b(president|vice president|senator|representative|congressman|congresswoman)\b",
    r"\b(governor|lieutenant governor|mayor|city council|state legislator|state senator|state representative|assemblyman|assemblywoman|alderman)\b",
    r"\b(secretary of|cabinet|minister|prime minister|ambassador|deputy secretary|undersecretary|assistant secretary)\b",
    r"\b(party chair|campaign|political director|press secretary|chief of staff|white house)\b",
    r"\b(majority leader|minority leader|speaker of the house|house speaker|whip)\b",
    r"\b(member of parliament|MP|chancellor|premier)\b",
    r"\bformer (president|senator|governor|representative|congressman)\b",
    r"\b(u\.?s\.? senate|state senate|house of representatives|parliament)\b",
]

LOBBYIST_PATTERNS: List[str] = [
    r"\b(registered lobbyist|lobbyist|lobbying)\b",
    r"\b(government affairs|government relations)\b",
    r"\b(advocacy director|policy advocate)\b",
]

ADVOCACY_PATTERNS: List[str] = [
    r"\b(advocacy|activist|campaign|action fund|political action)\b",
    r"\b(citizens for|americans for|alliance for|coalition for|foundation for|center for.*action|.*action center)\b",
    r"\bPAC\b",
    r"\b(super pac|political action committee)\b",
    r"\b(rights organization|justice organization|freedom foundation|liberty foundation)\b",
    r"\b(lobbying|lobbyist|government relations|public affairs firm)\b",
]

CORPORATE_PATTERNS: List[str] = [
    r"\b(CEO|CFO|COO|CTO|CMO|chief .* officer)\b",
    r"\b(spokesperson|communications director|public relations|PR director|media relations)\b",
    r"\b(vice president of|director of|head of) .*(marketing|communications|sales|business development)\b",
    r"\b(investor relations|shareholder communications)\b",
    r"\b(company representative|corporate representative|official spokesperson)\b",
]

# Priority order after the article-subject check
DISQUALIFICATION_RULES: List[DisqualificationRule] = [
    DisqualificationRule("politician", ("title", "affiliation"), tuple(POLITICIAN_PATTERNS)),
    DisqualificationRule("lobbyist", ("title", "affiliation"), tuple(LOBBYIST_PATTERNS)),
    DisqualificationRule("advocate", ("affiliation", "role"), tuple(ADVOCACY_PATTERNS)),
    DisqualificationRule("corporate_spokesperson", ("title", "role"), tuple(CORPORATE_PATTERNS)),
]

RESEARCH_INSTITUTION_PATTERNS: List[str] = [
    r"\b(university|college|institute of technology|polytechnic)\b",
    r"\bresearch (institute|center|centre|laboratory|lab)\b",
    r"\b(institute|center|centre) (for|of) .*(research|studies|science)\b",
    r"\bmedical (school|center|centre)\b",
    r"\bhospital .*(research|institute)\b",
    r"\b(teaching hospital|academic medical center)\b",
    r"\b(law school|school of law|business school|school of business)\b",
    r"\bnational (academy|academies|institute|institutes|laboratory|laboratories)\b",
    r"\bfederal research\b",
    r"\b(CERN|WHO|IMF|World Bank) research\b",
]

ACADEMIC_TITLE_PATTERNS: List[str] = [
    r"\b(professor|associate professor|assistant professor|emeritus professor)\b",
    r"\bresearch (fellow|scientist|associate|professor)\b",
    r"\bsenior (researcher|scientist|fellow)\b",
    r"\bpostdoctoral (fellow|researcher|associate)\b",
    r"\b(lecturer|senior lecturer|reader)\b",
    r"\bdepartment (chair|head|director)\b",
    r"\blab (director|head|lead)\b",
]

# Credential tokens searched in credentials + title; first match per pattern
DEGREE_PATTERNS: List[str] = [
    # Doctoral
    r"\bPh\.?D\b\.?",
    r"\bD\.?Phil\b\.?",
    r"\bEd\.?D\b\.?",
    r"\bPsy\.?D\b\.?",
    r"\bJ\.?S\.?D\b\.?",
    r"\bSc\.?D\b\.?",
    # Medical and law
    r"\bM\.?D\b\.?",
    r"\bD\.?O\b\.?",
    r"\bJ\.?D\b\.?",
    r"\bLL\.?M\b\.?",
    r"\bLL\.?B\b\.?",
    # Academic titles that imply a doctorate
    r"\bDr\.",
    r"\bProfessor\b",
    r"\bProf\.",
    # Master's
    r"\bM\.?S\b\.?",
    r"\bM\.?A\b\.?",
    r"\bM\.?P\.?H\b\.?",
    r"\bM\.?B\.?A\b\.?",
    # Professional certifications
    r"\bR\.?D\b\.?",
    r"\bR\.?N\b\.?",
    r"\bCPA\b",
]

# Patterns matched without re.IGNORECASE
CASE_SENSITIVE_PATTERNS = frozenset({r"\bDr\."})

# Human-readable explanation per disqualification reason
DISQUALIFICATION_EXPLANATIONS: Dict[str, str] = {
    "article_subject": "This person is the subject of the article. Their claims are being fact-checked, not used as evidence.",
    "politician": "Politicians are claimants, not independent experts. Their statements reflect political positions, not scientific assessment.",
    "lobbyist": "Lobbyists represent specific interests and cannot serve as independent experts.",
    "advocate": "Advocacy organizations exist to promote positions, not provide objective expertise.",
    "corporate_spokesperson": "Corporate representatives speak for company interests and may have conflicts of interest.",
    "undisclosed_conflict": "This person has a known conflict of interest that was not disclosed.",
    "missing_credentials": "This person lacks the academic credentials typically required for expertise in this domain.",
    "irrelevant_field": "This person's credentials are not relevant to the domain of this claim.",
    "no_publications": "This person has no peer-reviewed publications in the relevant field.",
}


def load_disqualification_rules(path: Union[str, Path]) -> List[DisqualificationRule]:
    """Load an ordered disqualification rule list from a JSON file.

    Args:
        path: Path to a JSON array of {"reason", "fields", "patterns"} objects

    Returns:
        Rules in file order, ready to pass to ExpertValidator
    """
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return [
        DisqualificationRule(
            reason=entry["reason"],
            fields=tuple(entry["fields"]),
            patterns=tuple(entry["patterns"]),
        )
        for entry in raw
    ]
