"""CLI for ui-metadata."""

import argparse
import logging
import os
import sys

from ui_metadata.assembly import (
    AssemblyScope,
    LabelsAssembler,
    LanguageAssembler,
    MenuAssembler,
    ProcessAssembler,
    SessionAssembler,
    ToolbarAssembler,
    WindowAssembler,
)
from ui_metadata.config import AssemblyOptions, MetadataContext, configure_logging
from ui_metadata.dictionary import InMemoryDictionary, load_snapshot
from ui_metadata.domain.enums import EntityKind
from ui_metadata.errors import MetadataError
from ui_metadata.output.document_writer import DocumentWriter

logger = logging.getLogger(__name__)


def build_scope(repository: InMemoryDictionary, args: argparse.Namespace) -> AssemblyScope:
    """Per-invocation scope from the common command-line options."""
    options = AssemblyOptions.from_env()
    options.pretty = not args.no_pretty
    if args.language:
        options.language = args.language
    if args.no_audit:
        options.include_audit_fields = False

    context = MetadataContext(
        role_id=args.role,
        role_name=args.role_name,
        language=options.language,
        user_id=args.user,
    )
    return AssemblyScope(repository=repository, context=context, options=options)


def dump_windows(scope: AssemblyScope, output_dir: str, writer: DocumentWriter) -> int:
    """Write every window the role can open to ``output_dir``; return how many."""
    role_id = scope.context.role_id
    window_ids = [
        a.window_id for a in scope.repository.query(
            EntityKind.WINDOW_ACCESS, lambda a: a.role_id == role_id and a.active,
        )
    ]
    assembler = WindowAssembler(scope)
    documents = {window_id: assembler.build(window_id) for window_id in dict.fromkeys(window_ids)}
    writer.write_all('windows', documents, output_dir)
    return len(documents)


def assemble(command: str, scope: AssemblyScope, args: argparse.Namespace):
    """Run the assembler behind ``command`` and return its document."""
    if command == 'window':
        return WindowAssembler(scope).build(args.id)
    if command == 'process':
        return ProcessAssembler(scope).build_definition(args.id)
    if command == 'report':
        return ProcessAssembler(scope).build_legacy(args.id)
    if command == 'menu':
        return MenuAssembler(scope).build()
    if command == 'session':
        return SessionAssembler(scope).build()
    if command == 'toolbar':
        return ToolbarAssembler(scope).build(args.id, tab_id=args.tab, is_new=args.new)
    if command == 'labels':
        return LabelsAssembler(scope).build()
    if command == 'languages':
        return LanguageAssembler(scope).build()
    raise ValueError(f"Unknown command: {command}")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('snapshot', help='Path to dictionary snapshot JSON file')
    parser.add_argument('--role', required=True, help='Role id whose grants filter the output')
    parser.add_argument('--role-name', help='Role name used in authorization errors')
    parser.add_argument('--language', help='Language code for translations (default: en_US)')
    parser.add_argument('--user', help='User id (session summaries)')
    parser.add_argument('--output', help='Output file (default: stdout)')
    parser.add_argument('--no-pretty', action='store_true', help='Disable pretty printing')
    parser.add_argument('--no-audit', action='store_true', help='Skip synthesized audit fields')


def main():
    parser = argparse.ArgumentParser(prog='ui-metadata', description='UI metadata assembler')
    subparsers = parser.add_subparsers(dest='command')

    for name, help_text, id_help in (
        ('window', 'Assemble a window document', 'Window id'),
        ('process', 'Assemble a process definition document', 'Process definition id'),
        ('report', 'Assemble a legacy report/process document', 'Process id'),
        ('toolbar', 'Assemble a window toolbar', 'Window id'),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        _add_common_arguments(sub)
        sub.add_argument('id', help=id_help)
        if name == 'toolbar':
            sub.add_argument('--tab', help='Restrict process buttons to one tab')
            sub.add_argument('--new', action='store_true', help='Toolbar for a new, unsaved record')

    for name, help_text in (
        ('menu', 'Assemble the role menu'),
        ('session', 'Assemble the session summary'),
        ('labels', 'Dump translated UI labels'),
        ('languages', 'Dump system languages'),
    ):
        _add_common_arguments(subparsers.add_parser(name, help=help_text))

    windows_parser = subparsers.add_parser('windows', help='Dump every window the role can open')
    _add_common_arguments(windows_parser)
    windows_parser.add_argument('output_dir', help='Output directory')

    # kinds command
    subparsers.add_parser('kinds', help='List snapshot entity kinds')

    args = parser.parse_args()

    if args.command == 'kinds':
        for kind in EntityKind:
            print(f"  {kind.value}")
        return

    if args.command is None:
        parser.print_help()
        return

    configure_logging()

    if not os.path.isfile(args.snapshot):
        print(f"Error: {args.snapshot} not found", file=sys.stderr)
        sys.exit(1)

    try:
        repository = load_snapshot(args.snapshot)
        scope = build_scope(repository, args)
        writer = DocumentWriter(pretty=scope.options.pretty)
        if args.command == 'windows':
            count = dump_windows(scope, args.output_dir, writer)
            print(f"Done! Wrote {count} windows to {args.output_dir}")
            return
        document = assemble(args.command, scope, args)
    except MetadataError as e:
        logger.debug("Assembly failed", exc_info=True)
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)

    writer.write(document, args.output)


if __name__ == '__main__':
    main()
