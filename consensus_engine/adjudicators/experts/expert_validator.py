"""Expert validation for people quoted in an article.

Two stages, per person:

1. Disqualification (absolute). Checked in priority order, first true
   reason is reported:
   article_subject > politician > lobbyist > advocate > corporate_spokesperson.
   A sitting senator with a PhD is still a senator: the claim being
   checked is most likely one they are advancing themselves.

2. Qualification. Credential tokens are extracted from credentials and
   title and matched against the domain's typical credentials; the
   affiliation is matched against research-institution patterns; the
   title against academic-position patterns. Valid if any of:
   - relevant degree AND research institution
   - relevant degree AND relevant publications
   - research institution AND academic title

Confidence is additive: +0.4 relevant degree, +0.3 institution,
+0.2 publications, +0.1 academic title. A disqualification is reported
with confidence 1.0 (confidence in the exclusion).

Validation never raises: malformed person entries fail validation.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Pattern, Sequence, Tuple, Union

from loguru import logger
from pydantic import ValidationError

from consensus_engine.adjudicators.experts.publication_lookup import (
    AcademicTitleProxy,
    PublicationLookup,
)
from consensus_engine.config.domain_configs import get_typical_credentials
from consensus_engine.config.expert_patterns import (
    ACADEMIC_TITLE_PATTERNS,
    CASE_SENSITIVE_PATTERNS,
    DEGREE_PATTERNS,
    DISQUALIFICATION_EXPLANATIONS,
    DISQUALIFICATION_RULES,
    RESEARCH_INSTITUTION_PATTERNS,
    DisqualificationRule,
)
from consensus_engine.data_management.schemas import (
    BatchValidationResult,
    DisqualificationReason,
    ExcludedPerson,
    ExpertDisqualifiers,
    ExpertQualityIndicators,
    ExpertQualityTier,
    ExpertValidationResult,
    PersonMention,
    ValidatedExpert,
)

PersonInput = Union[PersonMention, Dict[str, Any]]

# Disqualification reason -> ExpertDisqualifiers field
_REASON_FLAGS: Dict[str, str] = {
    "politician": "is_politician",
    "lobbyist": "is_lobbyist",
    "advocate": "is_advocate",
    "corporate_spokesperson": "is_corporate_spokesperson",
    "undisclosed_conflict": "has_undisclosed_conflict",
}


def _compile(pattern: str) -> Pattern[str]:
    if pattern in CASE_SENSITIVE_PATTERNS:
        return re.compile(pattern)
    return re.compile(pattern, re.IGNORECASE)


def is_article_subject(person_name: str, article_subjects: Iterable[str]) -> bool:
    """
    Check whether a person is one of the article's subjects.

    Matches case-insensitively on exact name, either name containing the
    other ("Smith" vs "John Smith"), or equal last names of at least two
    characters. Empty names and empty subjects never match.
    """
    name = (person_name or "").strip().lower()
    if not name:
        return False

    last_name = name.split()[-1]
    for subject in article_subjects or []:
        if not isinstance(subject, str):
            continue
        normalized = subject.strip().lower()
        if not normalized:
            continue
        if name == normalized or normalized in name or name in normalized:
            return True
        if len(last_name) >= 2 and last_name == normalized.split()[-1]:
            return True
    return False


def get_disqualification_explanation(reason: Union[DisqualificationReason, str]) -> str:
    """Human-readable explanation for a disqualification reason."""
    key = getattr(reason, "value", reason)
    return DISQUALIFICATION_EXPLANATIONS.get(key, "")


def get_expert_quality_tier(
    validation: ExpertValidationResult,
    quality_indicators: Optional[ExpertQualityIndicators] = None,
) -> ExpertQualityTier:
    """
    Determine the quality tier of a validated expert.

    Bibliometric indicators, when present, decide first:
    - top: h-index >= 40 and citations >= 5000
    - established: h-index >= 15 and citations >= 500
    - emerging: >= 3 relevant publications
    Otherwise fall back on validation confidence (>= 0.8 established,
    >= 0.5 emerging).

    Args:
        validation: Result from ExpertValidator.validate
        quality_indicators: Overrides validation.quality_indicators

    Returns:
        ExpertQualityTier (always unverified for invalid experts)
    """
    if not validation.is_valid_expert:
        return ExpertQualityTier.UNVERIFIED

    indicators = quality_indicators or validation.quality_indicators
    if indicators:
        h_index = indicators.h_index or 0
        citations = indicators.total_citations or 0
        if h_index >= 40 and citations >= 5000:
            return ExpertQualityTier.TOP
        if h_index >= 15 and citations >= 500:
            return ExpertQualityTier.ESTABLISHED
        if (indicators.relevant_publication_count or 0) >= 3:
            return ExpertQualityTier.EMERGING

    if validation.confidence_score >= 0.8:
        return ExpertQualityTier.ESTABLISHED
    if validation.confidence_score >= 0.5:
        return ExpertQualityTier.EMERGING
    return ExpertQualityTier.UNVERIFIED


class ExpertValidator:
    """
    Validates whether quoted people qualify as independent experts.

    Pattern tables default to consensus_engine.config.expert_patterns; the
    ordered disqualification rules can be replaced (see
    load_disqualification_rules) without touching this class.

    Usage:
        validator = ExpertValidator()
        result = validator.validate(person, article_subjects, "medicine")
        batch = validator.validate_all(persons, article_subjects, "medicine")

    Example:
        >>> validator = ExpertValidator()
        >>> result = validator.validate(
        ...     {"name": "Jane Roe", "title": "Professor of Epidemiology",
        ...      "credentials": "PhD", "affiliation": "Johns Hopkins University"},
        ...     [], "medicine")
        >>> result.is_valid_expert
        True
    """

    DEGREE_WEIGHT = 0.4
    INSTITUTION_WEIGHT = 0.3
    PUBLICATIONS_WEIGHT = 0.2
    ACADEMIC_TITLE_WEIGHT = 0.1

    def __init__(
        self,
        disqualification_rules: Optional[Sequence[DisqualificationRule]] = None,
        institution_patterns: Optional[List[str]] = None,
        academic_title_patterns: Optional[List[str]] = None,
        degree_patterns: Optional[List[str]] = None,
        publication_lookup: Optional[PublicationLookup] = None,
    ):
        """
        Initialize validator with pattern tables.

        Args:
            disqualification_rules: Ordered rules checked after article subject
            institution_patterns: Research-institution affiliation patterns
            academic_title_patterns: Academic-position title patterns
            degree_patterns: Credential token patterns
            publication_lookup: Source of the publications signal
        """
        self.disqualification_rules: List[Tuple[str, Tuple[str, ...], List[Pattern[str]]]] = [
            (rule.reason, tuple(rule.fields), [_compile(p) for p in rule.patterns])
            for rule in (disqualification_rules or DISQUALIFICATION_RULES)
        ]
        self.institution_patterns = [
            _compile(p) for p in (institution_patterns or RESEARCH_INSTITUTION_PATTERNS)
        ]
        self.academic_title_patterns = [
            _compile(p) for p in (academic_title_patterns or ACADEMIC_TITLE_PATTERNS)
        ]
        self.degree_patterns = [_compile(p) for p in (degree_patterns or DEGREE_PATTERNS)]
        self.publication_lookup = publication_lookup or AcademicTitleProxy()
        self.logger = logger.bind(component="ExpertValidator")

    # ── Disqualification ──────────────────────────────────────────────

    def check_disqualifiers(
        self, person: PersonMention, article_subjects: Iterable[str]
    ) -> ExpertDisqualifiers:
        """Evaluate every disqualification flag for a person."""
        flags: Dict[str, bool] = {
            "is_article_subject": is_article_subject(person.name, article_subjects),
        }
        for reason, fields, patterns in self.disqualification_rules:
            flag = _REASON_FLAGS.get(reason)
            if flag is None:
                continue
            text = self._join_fields(person, fields)
            flags[flag] = flags.get(flag, False) or any(p.search(text) for p in patterns)
        return ExpertDisqualifiers(**flags)

    def get_disqualification_reason(
        self, disqualifiers: ExpertDisqualifiers
    ) -> Optional[DisqualificationReason]:
        """First disqualification reason in priority order, or None."""
        if disqualifiers.is_article_subject:
            return DisqualificationReason.ARTICLE_SUBJECT
        for reason, _fields, _patterns in self.disqualification_rules:
            flag = _REASON_FLAGS.get(reason)
            if flag and getattr(disqualifiers, flag):
                return DisqualificationReason(reason)
        if disqualifiers.has_undisclosed_conflict:
            return DisqualificationReason.UNDISCLOSED_CONFLICT
        return None

    def should_exclude(
        self, person: PersonInput, article_subjects: Iterable[str]
    ) -> Tuple[bool, Optional[DisqualificationReason]]:
        """
        Quick disqualifier-only check, without scoring qualifications.

        Returns:
            (exclude, reason) tuple
        """
        mention = self._coerce_person(person)
        if mention is None:
            return True, DisqualificationReason.MISSING_CREDENTIALS
        reason = self.get_disqualification_reason(
            self.check_disqualifiers(mention, article_subjects)
        )
        return reason is not None, reason

    # ── Qualification ─────────────────────────────────────────────────

    def extract_credentials(
        self, credentials: Optional[str], title: Optional[str] = None
    ) -> List[str]:
        """First match of each credential pattern in credentials + title, deduplicated."""
        text = f"{credentials or ''} {title or ''}"
        found: List[str] = []
        for pattern in self.degree_patterns:
            match = pattern.search(text)
            if match and match.group(0) not in found:
                found.append(match.group(0))
        return found

    @staticmethod
    def has_relevant_credentials(credentials: List[str], domain: str) -> bool:
        """
        Match credential tokens against the domain's typical credentials.

        Dots (and parentheses on the typical side) are ignored and the
        comparison is a case-insensitive substring test either way, so
        "Ph.D." matches "PhD" and "MD" matches "MD (psychiatry)".
        """
        typical = [
            re.sub(r"[.()]", "", t).upper() for t in get_typical_credentials(domain)
        ]
        for credential in credentials:
            normalized = credential.replace(".", "").upper()
            if not normalized:
                continue
            if any(normalized in t or t in normalized for t in typical):
                return True
        return False

    def is_at_research_institution(self, affiliation: Optional[str]) -> bool:
        if not affiliation:
            return False
        return any(p.search(affiliation) for p in self.institution_patterns)

    def has_academic_title(self, title: Optional[str]) -> bool:
        if not title:
            return False
        return any(p.search(title) for p in self.academic_title_patterns)

    # ── Validation ────────────────────────────────────────────────────

    def validate(
        self,
        person: PersonInput,
        article_subjects: Iterable[str],
        domain: str,
    ) -> ExpertValidationResult:
        """
        Validate one person as an expert for a claim domain.

        Args:
            person: PersonMention or equivalent dict
            article_subjects: Names the article is about
            domain: Claim domain (Domain or its value)

        Returns:
            ExpertValidationResult; never raises
        """
        domain_key = getattr(domain, "value", domain)
        subjects = list(article_subjects or [])

        mention = self._coerce_person(person)
        if mention is None:
            return ExpertValidationResult(
                validation_reason="Not validated: malformed person entry",
                disqualification_reason=None,
            )

        disqualifiers = self.check_disqualifiers(mention, subjects)
        reason = self.get_disqualification_reason(disqualifiers)
        if reason is not None:
            self.logger.debug(f"Disqualified {mention.name!r}: {reason.value}")
            return ExpertValidationResult(
                disqualifiers=disqualifiers,
                is_valid_expert=False,
                confidence_score=1.0,
                validation_reason=get_disqualification_explanation(reason),
                disqualification_reason=reason,
            )

        credentials = self.extract_credentials(mention.credentials, mention.title)
        has_degree = bool(credentials) and self.has_relevant_credentials(credentials, domain_key)
        at_institution = self.is_at_research_institution(mention.affiliation)
        has_title = self.has_academic_title(mention.title)

        signal = self.publication_lookup.lookup(mention, domain_key, at_institution, has_title)
        has_publications = signal.has_relevant_publications

        score = 0.0
        if has_degree:
            score += self.DEGREE_WEIGHT
        if at_institution:
            score += self.INSTITUTION_WEIGHT
        if has_publications:
            score += self.PUBLICATIONS_WEIGHT
        if has_title:
            score += self.ACADEMIC_TITLE_WEIGHT
        score = min(1.0, round(score, 4))

        is_valid = (
            (has_degree and at_institution)
            or (has_degree and has_publications)
            or (at_institution and has_title)
        )

        if is_valid:
            reasons = []
            if has_degree:
                reasons.append(f"has relevant credentials ({', '.join(credentials)})")
            if at_institution:
                reasons.append("affiliated with research institution")
            if has_publications:
                reasons.append("has relevant publications")
            validation_reason = f"Valid expert: {', '.join(reasons)}"
        else:
            missing = []
            if not has_degree:
                missing.append("relevant academic credentials")
            if not at_institution:
                missing.append("research institution affiliation")
            if not has_publications:
                missing.append("verified publications")
            validation_reason = f"Not validated: Missing {', '.join(missing)}"

        self.logger.debug(
            f"Validated {mention.name!r}: valid={is_valid} confidence={score:.2f}"
        )

        return ExpertValidationResult(
            disqualifiers=disqualifiers,
            has_relevant_degree=has_degree,
            is_at_research_institution=at_institution,
            has_academic_title=has_title,
            has_relevant_publications=has_publications,
            is_valid_expert=is_valid,
            confidence_score=score,
            validation_reason=validation_reason,
            credentials_found=credentials,
            affiliation_found=mention.affiliation,
            quality_indicators=signal.indicators,
        )

    def validate_all(
        self,
        persons: Iterable[PersonInput],
        article_subjects: Iterable[str],
        domain: str,
    ) -> BatchValidationResult:
        """
        Partition persons into valid experts and excluded persons.

        Input order is preserved in both lists. Every entry is processed;
        malformed entries are excluded as missing_credentials.
        """
        domain_key = getattr(domain, "value", domain)
        subjects = list(article_subjects or [])
        persons = list(persons or [])

        valid_experts: List[ValidatedExpert] = []
        excluded: List[ExcludedPerson] = []

        for person in persons:
            mention = self._coerce_person(person)
            name = mention.name if mention is not None else self._raw_name(person)
            validation = self.validate(person, subjects, domain_key)

            if validation.is_valid_expert:
                valid_experts.append(
                    ValidatedExpert(
                        name=name,
                        credentials=", ".join(validation.credentials_found),
                        affiliation=validation.affiliation_found or "",
                        domain=domain_key,
                        validation=validation,
                        quality_tier=get_expert_quality_tier(validation),
                    )
                )
                continue

            if validation.disqualification_reason is not None:
                excluded.append(
                    ExcludedPerson(
                        name=name,
                        reason=validation.disqualification_reason,
                        explanation=get_disqualification_explanation(
                            validation.disqualification_reason
                        ),
                    )
                )
            else:
                excluded.append(
                    ExcludedPerson(
                        name=name,
                        reason=DisqualificationReason.MISSING_CREDENTIALS,
                        explanation=validation.validation_reason,
                    )
                )

        self.logger.info(
            f"Validated {len(persons)} persons: {len(valid_experts)} experts, {len(excluded)} excluded"
        )

        return BatchValidationResult(
            valid_experts=valid_experts,
            excluded_persons=excluded,
            total_processed=len(persons),
            valid_count=len(valid_experts),
            excluded_count=len(excluded),
        )

    # ── Helpers ───────────────────────────────────────────────────────

    def _coerce_person(self, person: Any) -> Optional[PersonMention]:
        if isinstance(person, PersonMention):
            return person
        if not isinstance(person, dict):
            return None
        try:
            return PersonMention.model_validate(person)
        except ValidationError:
            self.logger.warning("Malformed person entry, failing validation")
            return None

    @staticmethod
    def _raw_name(person: Any) -> str:
        if isinstance(person, dict) and isinstance(person.get("name"), str):
            return person["name"]
        return ""

    @staticmethod
    def _join_fields(person: PersonMention, fields: Tuple[str, ...]) -> str:
        return " ".join(
            value for value in (getattr(person, f, None) for f in fields) if isinstance(value, str)
        )


_default_validator: Optional[ExpertValidator] = None


def _get_default_validator() -> ExpertValidator:
    global _default_validator
    if _default_validator is None:
        _default_validator = ExpertValidator()
    return _default_validator


def validate_expert(
    person: PersonInput, article_subjects: Iterable[str], domain: str
) -> ExpertValidationResult:
    """Validate one person with the default pattern tables."""
    return _get_default_validator().validate(person, article_subjects, domain)


def validate_experts(
    persons: Iterable[PersonInput], article_subjects: Iterable[str], domain: str
) -> BatchValidationResult:
    """Validate a batch of persons with the default pattern tables."""
    return _get_default_validator().validate_all(persons, article_subjects, domain)


def should_exclude_from_expert_pool(
    person: PersonInput, article_subjects: Iterable[str]
) -> Tuple[bool, Optional[DisqualificationReason]]:
    """Quick disqualifier-only check with the default pattern tables."""
    return _get_default_validator().should_exclude(person, article_subjects)
