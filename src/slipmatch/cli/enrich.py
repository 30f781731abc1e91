#!/usr/bin/env python3
"""
Enrich CLI - Transfer Slip Enrichment

Command-line interface for matching bank-transfer notifications to
PocketSmith transactions and enriching them.
"""

import dataclasses
from typing import Any

import click

from ..core.config import Config, MemoStyle, NeedsReviewPolicy, get_config
from ..core.errors import InvalidRecordError, PocketsmithError, SourceError
from ..core.json_utils import write_json
from ..core.telemetry import ErrorReporter
from ..enrichment import EnrichmentOutcome, RecordResult, run_enrichment
from ..pocketsmith.client import PocketsmithClient

OUTCOME_ICONS = {
    EnrichmentOutcome.UPDATED: "✅",
    EnrichmentOutcome.WOULD_UPDATE: "📝",
    EnrichmentOutcome.ALREADY_ENRICHED: "🙅",
    EnrichmentOutcome.UNMATCHED: "⚠️ ",
    EnrichmentOutcome.SEARCH_FAILED: "❌",
    EnrichmentOutcome.UPDATE_FAILED: "❌",
    EnrichmentOutcome.INVALID_RECORD: "❌",
}


def apply_overrides(
    config: Config,
    token: str | None = None,
    account: int | None = None,
    meta_file: str | None = None,
    dry_run: bool = False,
    strict: bool = False,
    max_consecutive_enriched: int | None = None,
    any_payee: bool = False,
    transfer_phrases: tuple[str, ...] = (),
    needs_review: str | None = None,
    memo_style: str | None = None,
    no_attachments: bool = False,
    no_category_rules: bool = False,
) -> Config:
    """Return a copy of config with the values given on the command line applied."""
    pocketsmith_fields: dict[str, Any] = {}
    if token is not None:
        pocketsmith_fields["api_token"] = token
    if account is not None:
        pocketsmith_fields["transaction_account_id"] = account

    enrichment_fields: dict[str, Any] = {}
    if meta_file is not None:
        enrichment_fields["meta_file"] = meta_file
    if dry_run:
        enrichment_fields["dry_run"] = True
    if strict:
        enrichment_fields["strict_timestamps"] = True
    if max_consecutive_enriched is not None:
        enrichment_fields["max_consecutive_enriched"] = max_consecutive_enriched
    if any_payee:
        enrichment_fields["require_transfer_phrase"] = False
    if transfer_phrases:
        enrichment_fields["transfer_phrases"] = list(transfer_phrases)
    if needs_review is not None:
        enrichment_fields["needs_review"] = NeedsReviewPolicy(needs_review)
    if memo_style is not None:
        enrichment_fields["memo_style"] = MemoStyle(memo_style)
    if no_attachments:
        enrichment_fields["assign_attachments"] = False
    if no_category_rules:
        enrichment_fields["infer_categories"] = False

    return dataclasses.replace(
        config,
        pocketsmith=dataclasses.replace(config.pocketsmith, **pocketsmith_fields),
        enrichment=dataclasses.replace(config.enrichment, **enrichment_fields),
    )


def echo_result(result: RecordResult) -> None:
    """Print one progress line per notification record."""
    icon = OUTCOME_ICONS[result.outcome]
    if result.record is not None:
        label = f"{result.record.txref} to {result.record.to}"
    else:
        label = result.line
    detail = f" ({result.message})" if result.message else ""
    click.echo(f"[{result.index}/{result.total}] {icon} {result.outcome.value}: {label}{detail}")


@click.command()
@click.option("--pocketsmith-token", "token", help="Pocketsmith API token [env: POCKETSMITH_TOKEN]")
@click.option(
    "--pocketsmith-transaction-account",
    "account",
    type=int,
    help="Pocketsmith transaction account id [env: POCKETSMITH_TRANSACTION_ACCOUNT]",
)
@click.option(
    "--transaction-meta-file",
    "meta_file",
    help="Path or http(s) URL with transfer notification records [env: POCKETSMITH_META_FILE]",
)
@click.option("--dry-run", is_flag=True, help="Match and report without updating anything")
@click.option("--strict", is_flag=True, help="Abort the run on a malformed date/time")
@click.option(
    "--max-consecutive-enriched",
    type=click.IntRange(min=0),
    help="Stop after this many already-enriched transactions in a row (0 disables, default: 10)",
)
@click.option(
    "--any-payee",
    is_flag=True,
    help="Match transactions whatever their original payee (default: transfer phrases only)",
)
@click.option(
    "--transfer-phrase",
    "transfer_phrases",
    multiple=True,
    help="Original-payee phrase identifying a transfer (repeatable, replaces the defaults)",
)
@click.option(
    "--needs-review",
    type=click.Choice([p.value for p in NeedsReviewPolicy]),
    help="Force the needs-review flag on, or preserve it (default: force)",
)
@click.option(
    "--memo-style",
    type=click.Choice([s.value for s in MemoStyle]),
    help="Record only txref=<ref> in the memo, or the full notification (default: txref)",
)
@click.option("--no-attachments", is_flag=True, help="Do not assign slip images")
@click.option("--no-category-rules", is_flag=True, help="Do not apply category rules")
@click.option("--report-file", type=click.Path(dir_okay=False), help="Write a JSON report of the run")
@click.pass_context
def enrich(ctx: click.Context, report_file: str | None, **options: Any) -> None:
    """
    Enrich PocketSmith transactions from bank transfer notifications.

    Processes the newest notification first. Each record is matched to one
    transaction with the same date and amount; the payee becomes the
    transfer recipient and the memo records the transfer reference.

    Examples:
      slipmatch enrich --transaction-meta-file slips.txt
      slipmatch enrich --transaction-meta-file https://example.com/slips.txt --dry-run
    """
    base_config = ctx.obj["config"] if ctx.obj and "config" in ctx.obj else get_config()
    config = apply_overrides(base_config, **options)

    errors = config.validate() + config.validate_for_run()
    if errors:
        raise click.ClickException("\n".join(errors))

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    if verbose:
        click.echo(f"Account: {config.pocketsmith.transaction_account_id}")
        click.echo(f"Source: {config.enrichment.meta_file}")
        click.echo(f"Mode: {'Dry run' if config.enrichment.dry_run else 'Update'}")
        click.echo()

    reporter = ErrorReporter.from_config(config)
    try:
        with PocketsmithClient.from_config(config.pocketsmith) as ledger:
            summary = run_enrichment(config, ledger, reporter=reporter, on_result=echo_result)
    except SourceError as e:
        reporter.capture_exception(e, context=e.context)
        raise click.ClickException(str(e)) from e
    except PocketsmithError as e:
        raise click.ClickException(str(e)) from e
    except InvalidRecordError as e:
        reporter.capture_exception(e, context=e.context)
        raise click.ClickException(f"Aborting on malformed record: {e}") from e
    finally:
        reporter.flush()

    if summary.stopped_early:
        click.echo("Skipping due to consecutive already enriched")

    click.echo(f"Done. Processed {summary.total_records} transactions, {summary.updated} new")
    if verbose:
        for outcome, count in summary.outcome_counts().items():
            if count:
                click.echo(f"   {outcome}: {count}")

    if report_file:
        write_json(report_file, summary.to_dict())
        click.echo(f"   Report saved to: {report_file}")
