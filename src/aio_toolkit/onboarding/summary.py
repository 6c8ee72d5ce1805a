"""Rollup summary of an onboarding run."""

import logging

from aio_toolkit.onboarding.models import (
    OnboardEventsResponse,
    OnboardEventsSummary,
    OnboardSummaryCounts,
    OnboardSummaryItem,
    OnboardSummaryOverall,
    OnboardSummarySection,
)


def _section(items: list[OnboardSummaryItem]) -> OnboardSummarySection:
    counts = OnboardSummaryCounts(total=len(items))
    for item in items:
        if item.status == "created":
            counts.created += 1
        elif item.status == "existing":
            counts.existing += 1
        else:
            counts.failed += 1
    return OnboardSummarySection(items=items, counts=counts)


def build_summary(response: OnboardEventsResponse) -> OnboardEventsSummary:
    """Reduce the three result lists into per-entity and overall counts."""
    providers = _section([
        OnboardSummaryItem(
            id=r.provider.id,
            key=r.provider.key,
            label=r.provider.original_label,
            status=r.status,
            error=r.error,
        )
        for r in response.created_providers
    ])

    events = _section([
        OnboardSummaryItem(
            id=r.event.id,
            label=r.event.event_code,
            event_code=r.event.event_code,
            status=r.status,
            provider=r.provider.original_label if r.provider else None,
            error=r.error,
        )
        for r in response.created_events
    ])

    registrations = _section([
        OnboardSummaryItem(
            id=r.registration.id,
            key=r.registration.key,
            label=r.registration.label,
            status=r.status,
            provider=r.provider.original_label if r.provider else None,
            error=r.error,
        )
        for r in response.created_registrations
    ])

    sections = (providers, events, registrations)
    overall = OnboardSummaryOverall(
        total_processed=sum(s.counts.total for s in sections),
        total_created=sum(s.counts.created for s in sections),
        total_existing=sum(s.counts.existing for s in sections),
        total_failed=sum(s.counts.failed for s in sections),
    )

    return OnboardEventsSummary(
        providers=providers,
        events=events,
        registrations=registrations,
        overall=overall,
    )


def log_summary(
    summary: OnboardEventsSummary,
    logger: logging.Logger | logging.LoggerAdapter,
) -> None:
    """Emit one [SUMMARY] line per entity type plus an overall line."""
    for name, section in (
        ("Provider", summary.providers),
        ("Event", summary.events),
        ("Registration", summary.registrations),
    ):
        c = section.counts
        logger.debug(
            f"[SUMMARY] {name} creation summary: "
            f"{c.created} created, {c.existing} existing, {c.failed} failed"
        )
        for item in section.items:
            if item.status == "failed":
                logger.debug(f"[SUMMARY]   failed {name.lower()} {item.label}: {item.error}")

    o = summary.overall
    logger.info(
        f"[SUMMARY] Onboarding complete: {o.total_processed} processed, "
        f"{o.total_created} created, {o.total_existing} existing, {o.total_failed} failed"
    )
