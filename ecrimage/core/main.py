import argparse
import sys
from typing import Any, Sequence

from botocore.exceptions import BotoCoreError

from ._log_helper import configure_logging, get_logger
from .constants import ROOT_PACKAGE_NAME
from .exceptions import BaseError, InternalError, LoadError, UsageError

logger = get_logger(__name__)

DEFAULT_PROVIDER = "amazon_elastic_container_registry"


def parse_resource_tags(value: str) -> dict[str, str]:
    """Parse ``Key1=Value1,Key2=Value2`` into a tag map."""
    tags: dict[str, str] = {}
    for pair in value.split(","):
        if not pair.strip():
            continue
        key, sep, tag_value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise argparse.ArgumentTypeError(
                f"Invalid resource tag '{pair}', expected Key=Value"
            )
        tags[key] = tag_value.strip()
    return tags


def get_registry(
    region: str | None,
    aws_profile: str | None,
    provider: str = DEFAULT_PROVIDER,
) -> Any:
    from ecrimage.image import ImageRegistry

    parameters = dict(region=region, profile_name=aws_profile)
    return ImageRegistry(
        __provider__=dict(type=provider, parameters=parameters)
    )


def push(registry: Any, args: argparse.Namespace) -> Any:
    """
    ecrimage push
    """
    response = registry.push(
        images=args.images,
        resource_tags=args.resource_tags,
        registry_id=args.registry_id,
    )
    item = response.result
    print(f"Image pushed: {item.repository_uri}:{item.tag_or_digest}")
    return item


def pull(registry: Any, args: argparse.Namespace) -> Any:
    """
    ecrimage pull
    """
    response = registry.pull(
        images=args.images,
        registry_id=args.registry_id,
    )
    item = response.result
    separator = "@" if ":" in (item.tag_or_digest or "") else ":"
    print(
        f"Image pulled: {item.repository_uri}"
        f"{separator}{item.tag_or_digest}"
    )
    return item


def images(registry: Any, args: argparse.Namespace) -> Any:
    """
    ecrimage images
    """
    from ecrimage.image import ImageFilter, TagStatus

    tag_status = TagStatus.ANY
    if args.tagged:
        tag_status = TagStatus.TAGGED
    elif args.untagged:
        tag_status = TagStatus.UNTAGGED
    image_filter = ImageFilter(
        repository_names=args.repository_names,
        tag_status=tag_status,
        registry_id=args.registry_id,
    )
    return registry.list_images(image_filter=image_filter).result


def build_parser() -> argparse.ArgumentParser:
    from ecrimage import __version__

    parser = argparse.ArgumentParser(
        prog=ROOT_PACKAGE_NAME,
        description="Push, pull and list container images in Amazon ECR",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument("--region", type=str, default=None, help="AWS region")
    parser.add_argument(
        "--aws-profile", type=str, default=None, help="AWS profile name"
    )
    parser.add_argument(
        "--debug", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    push_parser = subparsers.add_parser(
        "push", help="Push a local image to the registry"
    )
    push_parser.add_argument(
        "images",
        nargs="*",
        help="[<registry-uri>/]<repository>[:<tag>]",
    )
    push_parser.add_argument(
        "--resource-tags",
        type=parse_resource_tags,
        default=None,
        help="Repository resource tags as Key1=Value1,Key2=Value2",
    )

    pull_parser = subparsers.add_parser(
        "pull", help="Pull an image from the registry"
    )
    pull_parser.add_argument(
        "images",
        nargs="*",
        help="[<registry-uri>/]<repository>[:<tag>|@<digest>]",
    )

    images_parser = subparsers.add_parser(
        "images", aliases=["list"], help="List images in the registry"
    )
    images_parser.add_argument(
        "repository_names",
        nargs="*",
        help="Repositories to list. Lists all when omitted",
    )
    status_group = images_parser.add_mutually_exclusive_group()
    status_group.add_argument(
        "--tagged", action="store_true", help="Only tagged images"
    )
    status_group.add_argument(
        "--untagged", action="store_true", help="Only untagged images"
    )

    for subparser in (push_parser, pull_parser, images_parser):
        subparser.add_argument(
            "--registry-id",
            type=str,
            default=None,
            help="AWS account ID of the registry",
        )
    return parser


_COMMANDS = {
    "push": push,
    "pull": pull,
    "images": images,
    "list": images,
}


def main(argv: Sequence[str] | None = None, registry: Any = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.debug else None)

    try:
        if registry is None:
            registry = get_registry(
                region=args.region, aws_profile=args.aws_profile
            )
        _COMMANDS[args.command](registry, args)
    except UsageError as e:
        print(f"{ROOT_PACKAGE_NAME} {args.command}: {e}", file=sys.stderr)
        return 2
    except (BaseError, InternalError, LoadError, BotoCoreError) as e:
        logger.debug("command failed", command=args.command, exc_info=True)
        print(f"{ROOT_PACKAGE_NAME} {args.command}: {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
