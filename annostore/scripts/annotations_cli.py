"""Command line access to the annotations of one canvas.

    annostore list https://example.org/canvas/1
    annostore create https://example.org/canvas/1 '{"type": "Annotation", ...}'
    annostore delete https://example.org/canvas/1 https://store/id/abc
"""
import argparse
import json
import logging
import sys

from envparse import env

from annostore.dao.document_dao import DocumentDao
from annostore.service.annotation_service import AnnotationService
from annostore.shared import cloud_logging
from annostore.shared.config import AdapterConfig


def build_parser():
    parser = argparse.ArgumentParser(description="Manage the annotations of a canvas")
    parser.add_argument("-u", "--url", required=False, help="Annotation store url")
    parser.add_argument("--timeout", type=float, required=False, help="Request timeout in seconds")
    parser.add_argument("--id-field", choices=["@id", "id"], required=False)
    parser.add_argument("--method", choices=["PATCH", "PUT"], required=False, help="Update method")
    parser.add_argument("--creator", required=False, help="Creator tag for new documents")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="print the AnnotationPage")
    list_parser.add_argument("canvas")

    get_parser = subparsers.add_parser("get", help="print one annotation")
    get_parser.add_argument("canvas")
    get_parser.add_argument("anno_id")

    for name in ("create", "update"):
        sub = subparsers.add_parser(name, help=f"{name} an annotation from JSON")
        sub.add_argument("canvas")
        sub.add_argument("annotation", help="annotation JSON, or - to read stdin")

    delete_parser = subparsers.add_parser("delete", help="delete an annotation")
    delete_parser.add_argument("canvas")
    delete_parser.add_argument("anno_id")

    return parser


def _adapter_config(args):
    overrides = {
        "endpoint_url": args.url,
        "timeout": args.timeout,
        "id_field": args.id_field,
        "update_method": args.method,
        "creator": args.creator,
    }
    return AdapterConfig.from_env(**{k: v for k, v in overrides.items() if v is not None})


def _load_annotation(raw):
    if raw == "-":
        raw = sys.stdin.read()
    return json.loads(raw)


def run(args, service=None, out=sys.stdout):
    if service is None:
        service = AnnotationService(
            args.canvas, document_dao=DocumentDao(config=_adapter_config(args))
        )

    if args.command == "list":
        page = service.all()
        if page is None:
            logging.error(f"AnnotationPage of {args.canvas} is unavailable")
            return 1
        json.dump(page.to_dict(), out, indent=2)
    elif args.command == "get":
        annotation = service.get(args.anno_id)
        if annotation is None:
            logging.error(f"Annotation {args.anno_id} not found on {args.canvas}")
            return 1
        json.dump(annotation, out, indent=2)
    else:
        if args.command == "create":
            response = service.create(_load_annotation(args.annotation))
        elif args.command == "update":
            response = service.update(_load_annotation(args.annotation))
        else:
            response = service.delete(args.anno_id)
        json.dump(response.page.to_dict(), out, indent=2)
        out.write("\n")
        if not response:
            logging.error(f"{args.command} failed: {response.kind} {response.message or ''}")
            return 1
        return 0
    out.write("\n")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    cloud_logging.configure(env("ANNOSTORE_CLI_LOGGER", default="annostore-cli"))
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
