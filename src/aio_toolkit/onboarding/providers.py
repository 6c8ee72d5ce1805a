"""Idempotent creation of Adobe I/O event providers."""

import json
import logging
import uuid
from typing import Any

from aio_toolkit.onboarding.models import ParsedProvider, ProviderInfo, ProviderResult
from aio_toolkit.onboarding.ports import ProviderStore

DEFAULT_PROJECT_NAME = "Unknown Project"

COMMERCE_INDICATORS = ("commerce", "magento", "adobe commerce")
COMMERCE_PROVIDER_METADATA = "dx_commerce_events"


def enhanced_label(project_name: str, label: str) -> str:
    """Per-project provider label, unique within the consumer organization."""
    return f"{project_name} - {label}"


def is_commerce_provider(provider: ParsedProvider) -> bool:
    """True when the key, label or description mentions a commerce keyword."""
    haystacks = (
        str(provider.key or "").lower(),
        str(provider.label or "").lower(),
        provider.description.lower(),
    )
    return any(indicator in text for indicator in COMMERCE_INDICATORS for text in haystacks)


class CreateProviders:
    """
    Create providers that do not exist yet, skip those that do.

    Existing providers are listed once per call. A failure while listing
    aborts the call; a failure creating one provider becomes a failed result
    and the remaining providers are still processed.
    """

    def __init__(
        self,
        store: ProviderStore,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ) -> None:
        """
        Initialize the provider resolver.

        Args:
            store: Provider store (list + create).
            logger: Logger shared across the onboarding run.
        """
        self.store = store
        self.logger = logger or logging.getLogger(__name__)

    async def process(
        self,
        providers: list[ParsedProvider],
        project_name: str = DEFAULT_PROJECT_NAME,
    ) -> list[ProviderResult]:
        """
        Resolve every desired provider against Adobe I/O.

        Args:
            providers: Parsed providers in input order.
            project_name: Project name used to build enhanced labels.

        Returns:
            One result per provider, in input order.
        """
        self.logger.debug(f"[CREATE] Creating providers for project: {project_name}")
        self.logger.debug(f"[INFO] Processing {len(providers)} provider(s)...")

        try:
            existing = await self.get_providers()
        except Exception as e:
            self.logger.error(f"[ERROR] Provider creation failed: {e}")
            raise

        results = []
        for provider in providers:
            results.append(await self.create_provider(provider, project_name, existing))

        self.logger.debug("[DONE] Provider creation completed")
        for result in results:
            if result.provider.id:
                self.logger.debug(
                    f"[ID] Provider ID: {result.provider.id} ({result.provider.original_label})"
                )

        return results

    async def get_providers(self) -> dict[str, dict[str, Any]]:
        """Fetch existing providers indexed by label (last one wins)."""
        self.logger.debug("[FETCH] Fetching existing providers...")

        try:
            provider_list = await self.store.list()
        except Exception as e:
            self.logger.error(f"[ERROR] Failed to fetch existing providers: {e}")
            raise

        existing = {provider.get("label"): provider for provider in provider_list}
        self.logger.debug(f"[INFO] Found {len(existing)} existing providers")
        return existing

    async def create_provider(
        self,
        provider: ParsedProvider,
        project_name: str,
        existing: dict[str, dict[str, Any]],
    ) -> ProviderResult:
        label = enhanced_label(project_name, provider.label)
        self.logger.debug(
            f"[PROCESS] Processing provider: {provider.label} with enhanced label: {label}"
        )

        remote = existing.get(label)
        if remote:
            self.logger.debug("[SKIP] Provider already exists - skipping creation")
            self.logger.debug(f"[ID] Existing ID: {remote.get('id')}")
            return ProviderResult(
                created=False,
                skipped=True,
                provider=ProviderInfo(
                    id=remote.get("id"),
                    instance_id=remote.get("instance_id") or None,
                    key=provider.key,
                    label=label,
                    original_label=provider.label,
                    description=provider.description,
                    docs_url=provider.docs_url,
                ),
                reason="Already exists",
                raw=remote,
            )

        try:
            payload = self.prepare_payload(provider, label)
            self.logger.debug(f"[NEW] Creating new provider with payload: {json.dumps(payload)}")

            created = await self.store.create(payload)

            self.logger.debug(
                f"[INFO] Provider created successfully! ID: {created.get('id')}, "
                f"Instance ID: {created.get('instance_id')}"
            )
            return ProviderResult(
                created=True,
                skipped=False,
                provider=ProviderInfo(
                    id=created.get("id"),
                    instance_id=created.get("instance_id") or None,
                    key=provider.key,
                    label=created.get("label") or label,
                    original_label=provider.label,
                    description=provider.description,
                    docs_url=provider.docs_url,
                ),
                raw=created,
            )
        except Exception as e:
            self.logger.error(f"[ERROR] Failed to create provider \"{label}\": {e}")
            return ProviderResult(
                created=False,
                skipped=False,
                error=str(e),
                provider=ProviderInfo(
                    key=provider.key,
                    label=label,
                    original_label=provider.label,
                    description=provider.description,
                    docs_url=provider.docs_url,
                ),
            )

    def prepare_payload(self, provider: ParsedProvider, label: str) -> dict[str, Any]:
        """Build the minimal creation payload (empty optional fields are omitted)."""
        payload: dict[str, Any] = {"label": label}

        if provider.description:
            payload["description"] = provider.description
        if provider.docs_url:
            payload["docs_url"] = provider.docs_url

        if is_commerce_provider(provider):
            payload["provider_metadata"] = COMMERCE_PROVIDER_METADATA
            payload["instance_id"] = str(uuid.uuid4())

        return payload
