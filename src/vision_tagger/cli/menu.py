"""Menu-driven interactive mode."""

import logging
from typing import IO

from rich.console import Console
from rich.markup import escape

from vision_tagger.models import User
from vision_tagger.service import ImageController, UserService

logger = logging.getLogger(__name__)

DEFAULT_GUEST_NAME = "Guest"

LOGIN_MENU = """
[bold]=== VisionTagger ===[/bold]
1. Continue as Guest
2. Register New User
3. Login
4. Exit"""

SESSION_MENU = """
[bold]=== {username} ({kind}) ===[/bold]
1. Analyze an image
2. Show my saved results
3. Show user information
4. Switch user
5. Exit"""


class InteractiveSession:
    """Read menu choices and dispatch them to the user service and controller.

    Errors raised by an action are printed and the loop carries on. End of
    input (Ctrl-D, or an exhausted ``stream``) ends the session.
    """

    def __init__(
        self,
        users: UserService,
        controller: ImageController,
        console: Console | None = None,
        stream: IO[str] | None = None,
    ) -> None:
        self.users = users
        self.controller = controller
        self.console = console or Console()
        self.stream = stream
        self.user: User | None = None

    def run(self) -> None:
        try:
            while True:
                if self.user is None:
                    if not self._login_menu():
                        break
                elif not self._session_menu():
                    break
        except (EOFError, KeyboardInterrupt):
            self.console.print()
        self.console.print("Exiting...")

    def _ask(self, prompt: str) -> str:
        line = self.console.input(prompt, stream=self.stream)
        if self.stream is not None and line == "":
            raise EOFError
        return line.strip()

    def _say(self, message: str) -> None:
        self.console.print(message, markup=False)

    def _login_menu(self) -> bool:
        self.console.print(LOGIN_MENU)
        choice = self._ask("Choose an option (1-4): ")
        if choice == "4":
            return False
        try:
            if choice == "2":
                self.user = self._register()
            elif choice == "3":
                self.user = self._login()
            else:
                if choice != "1":
                    self._say("Invalid choice. Continuing as guest...")
                self.user = self._guest()
        except ValueError as exc:
            self._say(f"✗ {exc}")
        return True

    def _session_menu(self) -> bool:
        self.console.print(
            SESSION_MENU.format(
                username=escape(self.user.username),
                kind="registered" if self.user.is_registered else "guest",
            )
        )
        choice = self._ask("Choose an option (1-5): ")
        try:
            if choice == "1":
                self._analyze()
            elif choice == "2":
                self._history()
            elif choice == "3":
                self._show_user()
            elif choice == "4":
                self.user = None
            elif choice == "5":
                return False
            else:
                self._say("Invalid choice.")
        except (ValueError, RuntimeError) as exc:
            logger.debug("Menu action failed", exc_info=True)
            self._say(f"Error: {exc}")
        return True

    def _guest(self) -> User:
        username = self._ask(f"Enter guest username (or press Enter for '{DEFAULT_GUEST_NAME}'): ")
        guest = self.users.create_guest_user(username or DEFAULT_GUEST_NAME)
        self._say(f"✓ Logged in as guest: {guest.username}")
        self._say("Note: Guest results are not saved.")
        return guest

    def _register(self) -> User | None:
        username = self._ask("Enter username: ")
        if not username:
            self._say("✗ Username cannot be empty.")
            return None
        if not self.users.is_username_available(username):
            self._say("✗ Username already exists. Please choose another.")
            return None
        email = self._ask("Enter email: ")
        user = self.users.create_registered_user(username, email)
        self._say(f"✓ Registration successful! Logged in as: {user.username}")
        self._say("Note: Your results will be saved.")
        return user

    def _login(self) -> User | None:
        username = self._ask("Enter username: ")
        user = self.users.login(username)
        if user is None:
            self._say("✗ User not found. Please register first.")
            return None
        self._say(f"✓ Welcome back, {user.username}!")
        return user

    def _analyze(self) -> None:
        path = self._ask("Image path: ")
        description = self._ask("Description (optional): ")
        result = self.controller.process_for_user(self.user, path, description or None)
        if self.user.is_registered:
            self._say(f"Saved as {result.image.id}")

    def _history(self) -> None:
        if not self.user.is_registered:
            self._say("Guest results are not saved.")
            return
        results = self.controller.display_user_history(self.user)
        if not results:
            self._say("No saved results yet.")

    def _show_user(self) -> None:
        self._say("=== User Information ===")
        self._say(f"Username: {self.user.username}")
        self._say(f"Type: {'Registered' if self.user.is_registered else 'Guest'}")
        if self.user.is_registered:
            self._say(f"Email: {self.user.email}")
        self._say(f"User ID: {self.user.id}")
