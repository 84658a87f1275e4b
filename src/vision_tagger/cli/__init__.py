"""VisionTagger CLI: analyze images, run the demo, or start the interactive menu."""

import argparse
import logging


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    from vision_tagger.config import DEFAULT_RENDERER, RENDERER_CHOICES

    parser = argparse.ArgumentParser(description="VisionTagger image label detection demo")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # analyze
    an_parser = subparsers.add_parser("analyze", help="Detect labels for one image")
    an_parser.add_argument("path", help="Image path or URI")
    an_parser.add_argument("--description", help="Optional image description")
    an_parser.add_argument(
        "--renderer",
        choices=sorted(RENDERER_CHOICES),
        default=DEFAULT_RENDERER,
        help=f"Output format (default: {DEFAULT_RENDERER})",
    )
    an_parser.add_argument("--user", help="Register this username and save the result")
    an_parser.add_argument("--email", help="Email for --user")
    an_parser.add_argument("--seed", type=int, help="Seed for the mock analyzer")

    # demo
    demo_parser = subparsers.add_parser("demo", help="Run the end-to-end demo scenario")
    demo_parser.add_argument("--seed", type=int, help="Seed for the mock analyzer")

    # interactive
    it_parser = subparsers.add_parser("interactive", help="Start the menu-driven mode")
    it_parser.add_argument(
        "--renderer",
        choices=sorted(RENDERER_CHOICES),
        default=DEFAULT_RENDERER,
        help=f"Output format (default: {DEFAULT_RENDERER})",
    )
    it_parser.add_argument("--seed", type=int, help="Seed for the mock analyzer")

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return

    try:
        if args.command == "analyze":
            _cmd_analyze(args)
        elif args.command == "demo":
            _cmd_demo(args)
        elif args.command == "interactive":
            _cmd_interactive(args)
    except (ValueError, RuntimeError) as exc:
        print(f"Error: {exc}")


def _configure_logging(verbose: bool) -> None:
    from rich.logging import RichHandler

    from vision_tagger.config import LOG_FORMAT, LOG_LEVEL

    logging.basicConfig(
        level=logging.DEBUG if verbose else LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[RichHandler(show_path=False)],
    )


def _build_controller(renderer_name: str, seed: int | None):
    """Wire a fresh directory, store, analyzer and renderer together."""
    from vision_tagger.analyzer.mock import MockAnalyzer
    from vision_tagger.render import get_renderer
    from vision_tagger.service import ImageController, UserService
    from vision_tagger.store import ResultStore, UserDirectory

    users = UserService(UserDirectory())
    controller = ImageController(
        MockAnalyzer(seed=seed),
        store=ResultStore(),
        renderer=get_renderer(renderer_name),
    )
    return users, controller


def _cmd_analyze(args: argparse.Namespace) -> None:
    """Analyze one image as a guest, or as a freshly registered user."""
    users, controller = _build_controller(args.renderer, args.seed)

    if args.user:
        if not args.email:
            print("Error: --email required with --user")
            return
        user = users.create_registered_user(args.user, args.email)
    else:
        user = users.create_guest_user("Guest")

    controller.process_for_user(user, args.path, args.description)


def _cmd_demo(args: argparse.Namespace) -> None:
    """Register Anna, analyze cat.jpg and list her saved results."""
    users, controller = _build_controller("console", args.seed)

    anna = users.create_registered_user("Anna", "anna@example.com")
    result = controller.upload_and_analyze(anna, "cat.jpg", "A cute cat photo")
    print(result)

    print(f"All results for {anna.username}:")
    controller.display_user_history(anna)


def _cmd_interactive(args: argparse.Namespace) -> None:
    """Run the menu loop until the user exits."""
    from vision_tagger.cli.menu import InteractiveSession

    users, controller = _build_controller(args.renderer, args.seed)
    InteractiveSession(users, controller).run()
