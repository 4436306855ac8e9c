import argparse
import getpass
import logging
import sys
from typing import List, Optional

from jobportal.config.settings import get_settings, get_logger, validate_config
from jobportal.core.exceptions import ApiError, ConfigurationError, SessionExpiredError
from jobportal.core.models import Application, Job, Post, User
from jobportal.modules.api_client import ApiClient, AuthSession, SessionStore
from jobportal.modules.boards import ApplicationsBoard, BoardScope, JobFilters, JobsBoard, status_options
from jobportal.modules.connections import ConnectionReconciler, RelationRecord, Tab
from jobportal.modules.portal import ApplicationsAPI, AuthAPI, JobsAPI
from jobportal.modules.social import SocialAPI

logger = logging.getLogger(__name__)

TAB_NAMES = {
    "connections": Tab.CONNECTIONS,
    "requests": Tab.REQUESTS,
    "suggestions": Tab.SUGGESTIONS,
    "discover": Tab.DISCOVER,
}

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_SESSION_EXPIRED = 2


class OutputFormatter:
    """Renders portal listings for the terminal."""

    @staticmethod
    def print_user(user: User) -> None:
        print(f"\n {user.full_name or user.email}")
        print(f"   Id: {user.id}")
        print(f"   Role: {user.role.value}")
        if user.email:
            print(f"   Email: {user.email}")
        if user.profile.headline:
            print(f"   Headline: {user.profile.headline}")
        if user.profile.company:
            print(f"   Company: {user.profile.company}")

    @staticmethod
    def print_network(tab: Tab, records: List[RelationRecord], reconciler: ConnectionReconciler) -> None:
        print("\n" + "=" * 80)
        print(f" NETWORK - {tab.name} ({len(records)})")
        print("=" * 80)
        if not records:
            print("   Nothing to show")
            return
        for record in records:
            profile = record.user.profile
            details = " | ".join(filter(None, [profile.headline, profile.company]))
            print(f"\n   {record.user.full_name or record.user_id} [{reconciler.action_label(record.user_id)}]")
            if details:
                print(f"       {details}")
            print(f"       User: {record.user_id}")
            if record.relation_id:
                print(f"       Relation: {record.relation_id}")

    @staticmethod
    def print_jobs(jobs: List[Job], page: int, pages: int, total: int) -> None:
        print("\n" + "=" * 80)
        print(f" JOBS - page {page}/{pages} ({total} total)")
        print("=" * 80)
        for job in jobs:
            print(f"\n   {job.title} @ {job.company}")
            print(f"       Id: {job.id}")
            if job.location:
                print(f"       Location: {job.location}")
            if job.job_type:
                print(f"       Type: {job.job_type.value}")
            if job.salary_range and (job.salary_range.min or job.salary_range.max):
                print(f"       Salary: {job.salary_range.min or '?'} - {job.salary_range.max or '?'} {job.salary_range.currency}")

    @staticmethod
    def print_applications(applications: List[Application], counts: dict) -> None:
        print("\n" + "=" * 80)
        print(" APPLICATIONS")
        print("=" * 80)
        print("   " + "  ".join(f"{label}: {counts[label]}" for label in status_options()))
        for application in applications:
            title = application.job.title if application.job else "Unknown job"
            candidate = application.candidate.full_name if application.candidate else ""
            print(f"\n   {title} [{application.status.value}]")
            print(f"       Id: {application.id}")
            if candidate:
                print(f"       Candidate: {candidate}")
            if application.notes:
                print(f"       Notes: {application.notes}")

    @staticmethod
    def print_feed(posts: List[Post]) -> None:
        print("\n" + "=" * 80)
        print(" FEED")
        print("=" * 80)
        for post in posts:
            author = post.author.full_name if post.author else "Unknown"
            print(f"\n   {author} ({post.like_count} likes, {len(post.comments)} comments)")
            print(f"       {post.content}")


class CLIApplication:
    """Main CLI application class."""

    def __init__(self, client: Optional[ApiClient] = None):
        self.settings = get_settings()
        if client is None:
            session = AuthSession.from_store(SessionStore(self.settings.session_file))
            client = ApiClient(session=session, settings=self.settings)
        self.client = client
        self.client.session.on_expired(self._on_session_expired)
        self.formatter = OutputFormatter()

        self.auth = AuthAPI(self.client)
        self.social = SocialAPI(self.client)
        self.reconciler = ConnectionReconciler(self.social, self.settings)
        self.jobs_board = JobsBoard(JobsAPI(self.client))
        self.applications_board = ApplicationsBoard(ApplicationsAPI(self.client))

    @staticmethod
    def _on_session_expired() -> None:
        print(" Your session has expired. Run `jobportal login` to sign in again.")

    def run(self, args: argparse.Namespace) -> int:
        """Run the CLI application with parsed arguments."""
        handler = getattr(self, f"_handle_{args.command.replace('-', '_')}")
        logger.debug(f"Running command {args.command}")
        try:
            return handler(args)
        except SessionExpiredError:
            return EXIT_SESSION_EXPIRED
        except ApiError as e:
            print(f" Error: {e.message}")
            return EXIT_FAILURE
        except ValueError as e:
            print(f" Error: {e}")
            return EXIT_FAILURE
        except KeyboardInterrupt:
            print("\n Interrupted by user")
            return EXIT_FAILURE
        finally:
            self.client.close()

    def _reconciler_result(self, ok: bool, success_message: str) -> int:
        if self.reconciler.notice:
            print(f" {self.reconciler.notice}")
        if not ok:
            print(f" Error: {self.reconciler.error}")
            return EXIT_FAILURE
        print(f" {success_message}")
        return EXIT_OK

    # ----------------------------
    # Account
    # ----------------------------
    def _handle_login(self, args: argparse.Namespace) -> int:
        password = args.password or getpass.getpass("Password: ")
        user = self.auth.login(args.email, password)
        print(f" Signed in as {user.full_name or user.email}")
        return EXIT_OK

    def _handle_logout(self, args: argparse.Namespace) -> int:
        self.auth.logout()
        print(" Signed out")
        return EXIT_OK

    def _handle_whoami(self, args: argparse.Namespace) -> int:
        if not self.client.session.is_authenticated:
            print(" Not signed in")
            return EXIT_FAILURE
        self.formatter.print_user(self.auth.get_me())
        return EXIT_OK

    # ----------------------------
    # Network
    # ----------------------------
    def _handle_network(self, args: argparse.Namespace) -> int:
        tab = TAB_NAMES[args.tab]
        self.reconciler.load_tab(tab)
        if self.reconciler.error:
            print(f" Error: {self.reconciler.error}")
            return EXIT_FAILURE
        records = self.reconciler.filtered_view(tab, args.search or "")
        self.formatter.print_network(tab, records, self.reconciler)
        return EXIT_OK

    def _handle_connect(self, args: argparse.Namespace) -> int:
        ok = self.reconciler.send_request(args.user_id, args.message or "")
        return self._reconciler_result(ok, f"Connection request sent to {args.user_id}")

    def _handle_accept(self, args: argparse.Namespace) -> int:
        ok = self.reconciler.accept_request(args.request_id)
        return self._reconciler_result(ok, "Connection request accepted")

    def _handle_decline(self, args: argparse.Namespace) -> int:
        ok = self.reconciler.decline_request(args.request_id)
        return self._reconciler_result(ok, "Connection request declined")

    def _handle_disconnect(self, args: argparse.Namespace) -> int:
        ok = self.reconciler.remove_connection(args.connection_id)
        return self._reconciler_result(ok, "Connection removed")

    # ----------------------------
    # Jobs and applications
    # ----------------------------
    def _handle_jobs(self, args: argparse.Namespace) -> int:
        filters = JobFilters(
            search=args.search,
            location=args.location,
            job_type=args.type,
            experience_level=args.level,
            min_salary=args.min_salary,
            max_salary=args.max_salary,
            sort_by=args.sort,
            page=args.page,
        )
        page = self.jobs_board.search(filters)
        self.formatter.print_jobs(page.items, page.page, page.pages, page.total)
        return EXIT_OK

    def _handle_applications(self, args: argparse.Namespace) -> int:
        self.applications_board.load(scope=BoardScope(args.scope), status=args.status, job_id=args.job)
        applications = self.applications_board.filter(args.search or "", args.status or "all")
        self.formatter.print_applications(applications, self.applications_board.status_counts())
        return EXIT_OK

    def _handle_set_status(self, args: argparse.Namespace) -> int:
        application = self.applications_board.update_status(args.application_id, args.status, notes=args.notes)
        print(f" Application {application.id} is now {application.status.value}")
        return EXIT_OK

    def _handle_feed(self, args: argparse.Namespace) -> int:
        self.formatter.print_feed(self.social.get_feed(page=args.page).items)
        return EXIT_OK

    def _handle_config_check(self, args: argparse.Namespace) -> int:
        print(" Checking configuration...")
        validation = validate_config()
        for key, value in validation['settings'].items():
            print(f"   {key}: {value}")
        for warning in validation['warnings']:
            print(f"   Warning: {warning}")
        if not validation['valid']:
            print(" Configuration validation failed:")
            for error in validation['errors']:
                print(f"   • {error}")
            return EXIT_FAILURE
        print(" Configuration is valid")
        return EXIT_OK


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="jobportal",
        description="Job portal command line client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s login --email jane@example.com
  %(prog)s network suggestions --search acme
  %(prog)s connect 64f0c2 --message "Hi, let's connect"
  %(prog)s jobs --search python --type full-time --sort salary-high
  %(prog)s applications --scope all --status reviewing
        """
    )

    # Logging options
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--quiet", action="store_true", help="Suppress non-essential output")

    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in and store the session")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")

    commands.add_parser("logout", help="Clear the stored session")
    commands.add_parser("whoami", help="Show the signed-in user")

    network = commands.add_parser("network", help="List a network view")
    network.add_argument("tab", choices=list(TAB_NAMES))
    network.add_argument("--search", help="Filter by name, company or headline")

    connect = commands.add_parser("connect", help="Send a connection request")
    connect.add_argument("user_id")
    connect.add_argument("--message", default="")

    accept = commands.add_parser("accept", help="Accept a received request")
    accept.add_argument("request_id")

    decline = commands.add_parser("decline", help="Decline a received request")
    decline.add_argument("request_id")

    disconnect = commands.add_parser("disconnect", help="Remove a connection")
    disconnect.add_argument("connection_id")

    jobs = commands.add_parser("jobs", help="Search job postings")
    jobs.add_argument("--search")
    jobs.add_argument("--location")
    jobs.add_argument("--type", choices=["full-time", "part-time", "contract", "internship"])
    jobs.add_argument("--level", choices=["entry", "mid", "senior", "executive"])
    jobs.add_argument("--min-salary", type=int)
    jobs.add_argument("--max-salary", type=int)
    jobs.add_argument("--sort", default="newest", choices=["newest", "oldest", "salary-high", "salary-low"])
    jobs.add_argument("--page", type=int, default=1)

    applications = commands.add_parser("applications", help="List applications")
    applications.add_argument("--scope", default="mine", choices=[s.value for s in BoardScope])
    applications.add_argument("--status", choices=["all"] + status_options())
    applications.add_argument("--job", help="Job id; required with --scope job")
    applications.add_argument("--search")

    set_status = commands.add_parser("set-status", help="Move an application to another status")
    set_status.add_argument("application_id")
    set_status.add_argument("status", choices=status_options())
    set_status.add_argument("--notes")

    feed = commands.add_parser("feed", help="Show the social feed")
    feed.add_argument("--page", type=int, default=1)

    commands.add_parser("config-check", help="Check client configuration")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI application."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        log = get_logger()
    except ConfigurationError as e:
        print(f" {e}")
        return EXIT_FAILURE

    # Adjust logging level based on arguments
    if args.verbose:
        log.setLevel(logging.DEBUG)
        for handler in log.handlers:
            handler.setLevel(logging.DEBUG)
    elif args.quiet:
        log.setLevel(logging.WARNING)

    # Create and run CLI application
    app = CLIApplication()
    return app.run(args)


if __name__ == "__main__":
    sys.exit(main())
