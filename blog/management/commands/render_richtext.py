"""Render an editor document from disk through the link injection pipeline."""

from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from blog.richtext import InternalLinkRule, parse_document, render_document
from blog.services import default_site, engine_config, fetch_link_rules


class Command(BaseCommand):
    help = 'Render a rich-text JSON document to HTML, injecting internal links.'

    def add_arguments(self, parser) -> None:
        parser.add_argument('document', help='Path to the editor JSON document.')
        parser.add_argument('--rules', help='Path to a JSON list of link rules. Defaults to the stored rules.')
        parser.add_argument('--site', default=None, help='Site whose rules apply (defaults to DEFAULT_SITE).')
        parser.add_argument('--max-links', type=int, default=None, help='Override the global link quota.')
        parser.add_argument('--stats', action='store_true', help='Write link statistics as JSON to stderr.')

    def handle(self, *args, **options) -> None:
        document = self._load_json(options['document'])
        site = options['site'] if options['site'] is not None else default_site()

        if options['rules']:
            raw_rules = self._load_json(options['rules'])
            if not isinstance(raw_rules, list):
                raise CommandError('The rules file must contain a JSON list.')
            rules = [InternalLinkRule.from_dict(item) for item in raw_rules if isinstance(item, dict)]
        else:
            rules = fetch_link_rules(site)

        injection = engine_config().injection_options()
        if options['max_links'] is not None:
            injection = replace(injection, max_total_links=options['max_links'])

        result = render_document(parse_document(document), rules, site, injection)
        self.stdout.write(result.html)
        if options['stats']:
            self.stderr.write(json.dumps(result.stats.as_dict(), indent=2))

    def _load_json(self, path: str):
        file_path = Path(path)
        if not file_path.exists():
            raise CommandError(f'File not found: {path}')
        try:
            with file_path.open('r', encoding='utf-8') as stream:
                return json.load(stream)
        except ValueError as exc:
            raise CommandError(f'{path} is not valid JSON: {exc}') from exc
