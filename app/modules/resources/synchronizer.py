"""Provider resource synchronizer.

Orchestrates pushes and pulls of RESJSON resources between the local tree
and the translation provider. Bulk operations fan out one provider call per
(resource, locale, key) unit and settle every unit; a failing unit is
reported in the returned BatchResult and never stops the others. Single-unit
operations raise their error to the caller.

Usage:
    from modules.resources.synchronizer import ResourceSynchronizer

    synchronizer = ResourceSynchronizer(settings, TransifexClient(settings.transifex))
    batch = synchronizer.push_all_resources()
    if not batch.is_success:
        ...
"""

from functools import partial
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from infrastructure.configuration import Settings
from infrastructure.logging import get_module_logger
from infrastructure.operations import (
    BatchResult,
    OperationResult,
    WorkUnit,
    settle_all,
)
from modules.resources.document import is_empty_value, parse
from modules.resources.errors import (
    ResourceSyncError,
    UsageError,
    classify_sync_error,
)
from modules.resources.hashing import source_string_hash
from modules.resources.locales import from_provider_code, to_provider_code
from modules.resources.merge import translate_resource_content
from modules.resources.provider import TranslationProvider
from modules.resources.sanitizer import sanitize
from modules.resources.workspace import (
    RESOURCE_SUFFIX,
    ResourceWorkspace,
    read_text,
    write_text,
)

logger = get_module_logger()

ALL_LANGUAGES = "all"


class ResourceSynchronizer:
    """Push/pull orchestration against a TranslationProvider.

    Attributes:
        settings: Immutable settings of the current command
        provider: Translation provider client
        workspace: Local resource tree
    """

    def __init__(
        self,
        settings: Settings,
        provider: TranslationProvider,
        workspace: Optional[ResourceWorkspace] = None,
    ):
        self.settings = settings
        self.provider = provider
        self.workspace = workspace or ResourceWorkspace.from_settings(settings)

    # ------------------------------------------------------------------
    # helpers

    def _settle(self, units: Sequence[WorkUnit]) -> BatchResult:
        return settle_all(
            units,
            classify_error=classify_sync_error,
            max_workers=self.settings.max_workers,
        )

    def _sanitized_content(self, path: Path) -> str:
        """Read, prune and serialize a resource file for upload."""
        doc = parse(read_text(path), source=str(path))
        return sanitize(doc).to_json()

    def _require_source_resource(self, slug: str) -> Path:
        if not slug:
            raise UsageError("No resource defined")
        path = self.workspace.source_resource_path(slug)
        if not path.is_file():
            raise UsageError(
                f"Resource file {slug}{RESOURCE_SUFFIX} not found in {self.workspace.source_path}"
            )
        return path

    # ------------------------------------------------------------------
    # source resources

    def list_resources(self) -> List[Dict[str, Any]]:
        """Return the resources registered in the provider project."""
        resources = self.provider.list_resources()
        if not resources:
            logger.info("no_resources_found")
        for resource in resources:
            logger.info("project_resource", name=resource.get("name"), slug=resource.get("slug"))
        return resources

    def add_resource(
        self, slug: str, name: Optional[str] = None, force: bool = False
    ) -> OperationResult:
        """Create a new provider resource from ``<source>/<slug>.resjson``.

        Raises:
            UsageError: If the file is missing, or ignored and ``force`` is off.
            ProviderError: If the provider call fails.
        """
        path = self._require_source_resource(slug)
        if self.workspace.is_ignored(path.name) and not force:
            raise UsageError(
                f"{path} is listed in ignoredResources, use --force to add it anyway"
            )
        content = self._sanitized_content(path)
        body = self.provider.create_resource(name or slug, slug, content)
        logger.info("resource_added", resource=slug, name=name or slug)
        return OperationResult.success(
            data=body, message=f"Uploaded resource {slug}", resource=slug
        )

    def _push_resource_content(self, slug: str) -> Dict[str, Any]:
        path = self.workspace.source_resource_path(slug)
        return self.provider.update_resource_content(slug, self._sanitized_content(path))

    def push_resource(self, slug: str) -> OperationResult:
        """Replace the provider source content of one resource.

        Raises:
            UsageError: If the source file does not exist.
            ProviderRejectedError, TransportError: If the upload fails.
        """
        self._require_source_resource(slug)
        counts = self._push_resource_content(slug)
        logger.info("resource_pushed", resource=slug, **_counts(counts))
        return OperationResult.success(
            data=counts, message=f"Resource {slug} updated", resource=slug
        )

    def push_all_resources(self) -> BatchResult:
        """Push every non-ignored source resource concurrently."""
        units = [
            WorkUnit(
                context={"resource": slug},
                call=partial(self._push_resource_content, slug),
                message=f"Resource {slug} updated",
            )
            for slug in self.workspace.source_resource_slugs()
        ]
        batch = self._settle(units)
        for result in batch:
            if result.is_success:
                logger.info("resource_pushed", resource=result.context["resource"], **_counts(result.data))
            else:
                logger.error(
                    "resource_push_failed",
                    resource=result.context["resource"],
                    error=result.message,
                    hint="Check that the resource is already added into Transifex.",
                )
        return batch

    def update_key_instruction(self, resource: str, key: str, comment: str) -> OperationResult:
        """Update the translator instruction of one source string.

        Raises:
            UsageError: If the resource file is missing or key/comment is empty.
            ProviderError: If the provider call fails.
        """
        self._require_source_resource(resource)
        if not key:
            raise UsageError("No key defined")
        if not comment:
            raise UsageError("No comment defined")

        string_hash = source_string_hash(key)
        logger.info("updating_instruction", resource=resource, key=key, string_hash=string_hash)
        body = self.provider.update_source_comment(resource, string_hash, comment)
        return OperationResult.success(
            data=body,
            message=f"Comment updated to {comment}",
            resource=resource,
            key=key,
        )

    # ------------------------------------------------------------------
    # languages

    def provision_language(self, code: str) -> BatchResult:
        """Create a language team for ``code`` or, with "all", every locale directory.

        ``code`` may be a local tag (``fi-FI``) or a provider code (``fi_FI``).
        """
        if not code:
            raise UsageError("Language code required: <lang-code|all>")

        if code == ALL_LANGUAGES:
            codes = [to_provider_code(tag) for tag in self.workspace.locale_tags()]
        else:
            codes = [to_provider_code(code) or code]

        coordinators = list(self.settings.transifex.lang_coordinators)
        units = [
            WorkUnit(
                context={"locale": language_code},
                call=partial(self.provider.create_language, language_code, coordinators),
                message=f"Created language {language_code}",
            )
            for language_code in codes
        ]
        batch = self._settle(units)
        for result in batch:
            if result.is_success:
                logger.info("language_created", locale=result.context["locale"])
            else:
                logger.error("language_create_failed", locale=result.context["locale"], error=result.message)
        return batch

    # ------------------------------------------------------------------
    # translations

    def _push_translation_content(self, locale_tag: str, slug: str) -> Dict[str, Any]:
        path = self.workspace.translation_path(locale_tag, slug)
        return self.provider.update_translation_content(
            slug, to_provider_code(locale_tag), self._sanitized_content(path)
        )

    def push_translations(self, locale: Optional[str] = None) -> BatchResult:
        """Upload every translation file, for all locales or just ``locale``.

        Raises:
            UsageError: If ``locale`` is given but is not a translation directory.
        """
        tags = self.workspace.locale_tags(only=[locale] if locale else None)
        if locale and not tags:
            raise UsageError(f"No translation directory {locale} in {self.workspace.strings_path}")

        units = [
            WorkUnit(
                context={"resource": slug, "locale": to_provider_code(tag)},
                call=partial(self._push_translation_content, tag, slug),
                message=f"Translation for {tag} of resource {slug} uploaded",
            )
            for tag in tags
            for slug in self.workspace.translation_slugs(tag)
        ]
        batch = self._settle(units)
        for result in batch:
            if result.is_success:
                logger.info("translation_pushed", **result.context, **_counts(result.data))
            else:
                logger.error("translation_push_failed", error=result.message, **result.context)
        return batch

    def push_single_translation_key(
        self,
        resource: str,
        key: str,
        locales: Optional[Sequence[str]] = None,
    ) -> BatchResult:
        """Push one key's translation from every locale directory that has it.

        Args:
            resource: Resource slug.
            key: Data key to push.
            locales: Optional subset of local tags to scan.

        Raises:
            UsageError: If the source resource is missing, or no locale file
                holds a value for ``key``. Nothing is sent in that case.
        """
        self._require_source_resource(resource)
        if not key:
            raise UsageError("No translation key defined")

        translations = []
        for tag in self.workspace.locale_tags(only=locales):
            path = self.workspace.translation_path(tag, resource)
            if not path.is_file() or self.workspace.is_ignored(path.name):
                continue
            doc = parse(read_text(path), source=str(path))
            value = doc.get(key)
            if is_empty_value(value):
                continue
            translations.append((to_provider_code(tag), value))

        if not translations:
            raise UsageError(f"No keys for {key} found in resource {resource}")

        string_hash = source_string_hash(key)
        units = [
            WorkUnit(
                context={"resource": resource, "locale": language_code, "key": key},
                call=partial(
                    self.provider.update_string_translation,
                    resource,
                    language_code,
                    string_hash,
                    value,
                ),
                message=f"Translation for '{key}' updated to '{value}'",
            )
            for language_code, value in translations
        ]
        batch = self._settle(units)
        for result in batch:
            if result.is_success:
                logger.info("translation_key_pushed", **result.context)
            else:
                logger.error("translation_key_push_failed", error=result.message, **result.context)
        return batch

    def _pull_translation(self, slug: str, language_code: str) -> Dict[str, Any]:
        body = self.provider.get_translation_file(
            slug, language_code, self.settings.transifex.translation_mode
        )
        content = body.replace("\r\n", "\n")
        path = self.workspace.translation_path(from_provider_code(language_code), slug)
        write_text(path, content)
        logger.info("translation_file_written", resource=slug, locale=language_code, path=str(path))
        return {"path": str(path), "content": content}

    def pull_translations(self, locale_filter: Optional[Sequence[str]] = None) -> BatchResult:
        """Download translations and write one file per (language, resource).

        Args:
            locale_filter: Optional provider codes to restrict the pull to.

        Raises:
            ProviderError: If the project details cannot be fetched. Failures
                of single downloads are reported in the batch instead.
        """
        details = self.provider.get_project_details()
        teams = [
            team
            for team in details.get("teams", [])
            if not locale_filter or team in locale_filter
        ]
        slugs = [
            resource["slug"]
            for resource in details.get("resources", [])
            if not self.workspace.is_ignored(f"{resource['slug']}{RESOURCE_SUFFIX}")
        ]

        units = [
            WorkUnit(
                context={"resource": slug, "locale": language_code},
                call=partial(self._pull_translation, slug, language_code),
                message=f"Received {language_code} translation for resource {slug}",
            )
            for language_code in teams
            for slug in slugs
        ]
        batch = self._settle(units)
        for result in batch.failed:
            logger.error("translation_pull_failed", error=result.message, **result.context)
        return batch

    def order_translations(
        self,
        resources: Optional[Sequence[str]] = None,
        locales: Optional[Sequence[str]] = None,
    ) -> BatchResult:
        """Rewrite translation files in the key order and layout of the source.

        Pairs without a translation file are logged and skipped. A file that
        cannot be parsed fails its own pair only. Each file's new text is
        computed in full before it is written.

        Args:
            resources: Optional subset of resource slugs.
            locales: Optional subset of local tags.
        """
        slugs = [
            slug
            for slug in self.workspace.source_resource_slugs()
            if resources is None or slug in resources
        ]
        tags = self.workspace.locale_tags(only=locales)

        results: List[OperationResult] = []
        for slug in slugs:
            source_path = self.workspace.source_resource_path(slug)
            for tag in tags:
                translation_path = self.workspace.translation_path(tag, slug)
                if not translation_path.is_file():
                    logger.warning("translation_file_missing", path=str(translation_path))
                    continue

                context = {"resource": slug, "locale": tag}
                try:
                    merged = translate_resource_content(
                        read_text(translation_path),
                        read_text(source_path),
                        source=str(translation_path),
                    )
                    write_text(translation_path, merged.text)
                except (ResourceSyncError, OSError) as e:
                    message, error_code = classify_sync_error(e)
                    logger.warning("translation_order_failed", error=message, **context)
                    results.append(OperationResult.failure(message, error_code=error_code, **context))
                    continue

                message = f"Rewrote {translation_path}"
                if merged.is_degraded:
                    message += f" ({len(merged.unmatched_keys)} keys not in source)"
                logger.info("translation_ordered", path=str(translation_path), unmatched=len(merged.unmatched_keys))
                results.append(
                    OperationResult.success(
                        data={
                            "path": str(translation_path),
                            "unmatched_keys": merged.unmatched_keys,
                        },
                        message=message,
                        **context,
                    )
                )
        return BatchResult(results)


def _counts(data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Pick the string counts out of a push response for logging."""
    if not isinstance(data, dict):
        data = {}
    return {
        "strings_added": data.get("strings_added"),
        "strings_updated": data.get("strings_updated"),
        "strings_delete": data.get("strings_delete"),
    }
