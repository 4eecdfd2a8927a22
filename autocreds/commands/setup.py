"""
Setup Wizard

Walks the user through creating an auto-credentials setup:

1. an SSO profile (``<prefix>-sso`` plus its sso-session) or an OIDC profile
   (``<prefix>-oidc``),
2. a refresh script ``refresh-if-needed-<prefix>.sh``,
3. an auto-credentials profile (``<prefix>-auto-credentials``) whose
   credential_process runs that script.

Each step is a separate write of the config file or the script. When a
profile or script already exists and --force was not given, the wizard keeps
the existing one and moves on. Other errors are raised to the caller.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, TypeVar

from ..aws_config.discovery import (
    extract_profile_details,
    find_new_sso_profiles,
    find_sso_profiles,
    resolve_sso_start_url,
)
from ..aws_config.profiles import (
    create_auto_refresh_profile,
    create_oidc_profile,
    create_sso_profile,
    load_config,
)
from ..aws_config.templates import (
    AUTO_CREDENTIALS_SUFFIX,
    OIDC_SUFFIX,
    SSO_SUFFIX,
    profile_header,
    profile_name_for,
)
from ..aws_config.validate import validate_profile
from ..config import Settings
from ..errors import (
    EnvironmentCheckError,
    ExternalProcessFailure,
    InvalidOptionError,
    MissingDependencyError,
    ProfileExistsError,
    ScriptExistsError,
    UnsupportedProviderError,
)
from ..scripts.templates import ScriptKind, refresh_script_name
from ..scripts.writer import create_refresh_script
from ..utils.environment import GCLOUD_INSTALL_URL, check_environment, check_google_cloud_sdk
from ..utils.file_store import FileStore, LocalFileStore
from ..utils.messages import STATUS, format_status
from ..utils.process import run_aws_configure_sso, run_aws_sso_login
from . import prompts
from .prompts import InputFunc, is_yes, prompt, prompt_multiple

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUPPORTED_OIDC_PROVIDERS = ("google",)


class SetupOptions:
    """Command-line options for the setup command."""

    def __init__(self, force: bool = False, dry_run: bool = False,
                 script_path: Optional[str] = None, manual_setup: bool = False,
                 skip_login: bool = False, oidc_provider: Optional[str] = None,
                 oidc_client_id: Optional[str] = None, role_arn: Optional[str] = None,
                 verify: bool = False):
        self.force = force
        self.dry_run = dry_run
        self.script_path = script_path
        self.manual_setup = manual_setup
        self.skip_login = skip_login
        self.oidc_provider = oidc_provider
        self.oidc_client_id = oidc_client_id
        self.role_arn = role_arn
        self.verify = verify


class SetupAnswers:
    """Everything the wizard needs to write profiles and scripts."""

    def __init__(self, prefix: str, region: str, sso_start_url: Optional[str] = None,
                 account_id: Optional[str] = None, role_name: Optional[str] = None,
                 oidc_provider: Optional[str] = None, oidc_client_id: Optional[str] = None,
                 role_arn: Optional[str] = None, use_oidc: bool = False):
        self.prefix = prefix
        self.region = region
        self.sso_start_url = sso_start_url
        self.account_id = account_id
        self.role_name = role_name
        self.oidc_provider = oidc_provider
        self.oidc_client_id = oidc_client_id
        self.role_arn = role_arn
        self.use_oidc = use_oidc

    @property
    def is_oidc(self) -> bool:
        return self.use_oidc or bool(self.oidc_provider)

    @property
    def sso_profile(self) -> str:
        return profile_name_for(self.prefix, SSO_SUFFIX)

    @property
    def oidc_profile(self) -> str:
        return profile_name_for(self.prefix, OIDC_SUFFIX)

    @property
    def auto_credentials_profile(self) -> str:
        return profile_name_for(self.prefix, AUTO_CREDENTIALS_SUFFIX)


class SetupWizard:
    """
    Runs the setup sequence.

    Args:
        options: Parsed command-line options
        store: File access implementation (local disk by default)
        settings: Resolved paths (from the environment by default)
        input_func: Replacement for ``input`` used by every prompt
        platform: Override for ``platform.system()``
    """

    def __init__(self, options: SetupOptions, store: Optional[FileStore] = None,
                 settings: Optional[Settings] = None, input_func: Optional[InputFunc] = None,
                 platform: Optional[str] = None):
        self.options = options
        self.store = store or LocalFileStore()
        self.settings = settings or Settings.from_env(options.script_path)
        self.input_func = input_func
        self.platform = platform

    def run(self) -> SetupAnswers:
        """
        Run the whole setup.

        Returns:
            The answers the setup was performed with

        Raises:
            EnvironmentCheckError: Required tools are missing
            MissingDependencyError: gcloud is missing for Google OIDC
            UnsupportedProviderError: The OIDC provider has no refresh script
        """
        print(f"\n{STATUS['INFO']} AWS SSO Auto-Credentials Setup\n")

        self.check_prerequisites()
        answers = self.collect_answers()

        config_dir = self.settings.config_path.parent
        if not self.store.exists(config_dir):
            if self.options.dry_run:
                print(f"[DRY RUN] Would create directory: {config_dir}")
            else:
                self.store.ensure_dir(config_dir)

        if answers.is_oidc:
            self.create_oidc_profile(answers)
        else:
            self.create_sso_profile(answers)

        script_path = self.script_path(answers)
        self.create_refresh_script(answers, script_path)
        self.create_auto_credentials_profile(answers, script_path)

        print(f"\n{STATUS['SUCCESS']} Setup completed successfully!\n")

        if not self.options.dry_run and not self.options.skip_login and not answers.is_oidc:
            self.login(answers)

        self.print_usage(answers)

        if self.options.verify and not self.options.dry_run:
            self.verify(answers)

        return answers

    # Steps

    def check_prerequisites(self) -> None:
        report = self._perform("Checking environment", lambda: check_environment(self.platform))

        if report.warnings:
            print(f"\n{STATUS['WARNING']} Warnings:")
            for warning in report.warnings:
                print(f"  - {warning}")

        if report.errors:
            print(f"\n{STATUS['ERROR']} Errors:")
            for error in report.errors:
                print(f"  - {error}")
            raise EnvironmentCheckError(report.errors)

    def create_sso_profile(self, answers: SetupAnswers) -> None:
        name = answers.sso_profile
        if self.options.dry_run:
            print(f"[DRY RUN] Would create SSO profile: {name}")
            return

        try:
            self._perform("Creating SSO profile", lambda: create_sso_profile(
                self.store,
                self.settings.config_path,
                profile_name=name,
                region=answers.region,
                sso_start_url=answers.sso_start_url,
                account_id=answers.account_id,
                role_name=answers.role_name,
                force=self.options.force,
            ))
        except ProfileExistsError:
            self._keep_existing(f"Profile {name}", "profile")
            return
        print(f"Created SSO profile: {name}")

    def create_oidc_profile(self, answers: SetupAnswers) -> None:
        name = answers.oidc_profile
        if self.options.dry_run:
            print(f"[DRY RUN] Would create OIDC profile: {name}")
            return

        try:
            self._perform("Creating OIDC profile", lambda: create_oidc_profile(
                self.store,
                self.settings.config_path,
                profile_name=name,
                region=answers.region,
                role_arn=answers.role_arn,
                oidc_provider=answers.oidc_provider,
                oidc_client_id=answers.oidc_client_id,
                force=self.options.force,
            ))
        except ProfileExistsError:
            self._keep_existing(f"Profile {name}", "profile")
            return
        print(f"Created OIDC profile: {name}")

    def script_path(self, answers: SetupAnswers) -> Path:
        return self.settings.script_dir / refresh_script_name(answers.prefix)

    def create_refresh_script(self, answers: SetupAnswers, script_path: Path) -> None:
        if self.options.dry_run:
            print(f"[DRY RUN] Would create refresh script: {script_path}")
            return

        if answers.is_oidc:
            profile_name = answers.oidc_profile
            kind = ScriptKind.OIDC
            params = {"role_arn": answers.role_arn, "client_id": answers.oidc_client_id}
        else:
            profile_name = answers.sso_profile
            kind = ScriptKind.SSO
            params = None

        try:
            self._perform("Creating refresh script", lambda: create_refresh_script(
                self.store,
                script_path,
                profile_name,
                kind,
                params,
                force=self.options.force,
            ))
        except ScriptExistsError:
            self._keep_existing(f"Script {script_path}", "script")
            return
        print(f"Created refresh script: {script_path}")

    def create_auto_credentials_profile(self, answers: SetupAnswers, script_path: Path) -> None:
        name = answers.auto_credentials_profile
        if self.options.dry_run:
            print(f"[DRY RUN] Would create auto-credentials profile: {name}")
            return

        try:
            self._perform("Creating auto-credentials profile", lambda: create_auto_refresh_profile(
                self.store,
                self.settings.config_path,
                profile_name=name,
                region=answers.region,
                script_path=script_path,
                force=self.options.force,
                platform=self.platform,
            ))
        except ProfileExistsError:
            self._keep_existing(f"Profile {name}", "profile")
            return
        print(f"Created auto-credentials profile: {name}")

    def login(self, answers: SetupAnswers) -> bool:
        """Run ``aws sso login``. A failure is reported, not raised."""
        print(f"{STATUS['INFO']} Initiating AWS SSO login...")
        print(f"{STATUS['INFO']} This will open a browser window for authentication.")
        try:
            run_aws_sso_login(answers.sso_profile)
        except ExternalProcessFailure as e:
            print(f"{STATUS['ERROR']} AWS SSO login failed: {e}")
            print(f"\n{STATUS['INFO']} You can manually run the login command:")
            print(f"  aws sso login --profile {answers.sso_profile}")
            return False
        print(f"\n{STATUS['SUCCESS']} AWS SSO login completed successfully!")
        return True

    def print_usage(self, answers: SetupAnswers) -> None:
        auto = answers.auto_credentials_profile
        login_pending = self.options.dry_run or self.options.skip_login

        print("\nTo use your AWS credentials:")
        if not answers.is_oidc and login_pending:
            print(f"  1. Run: aws sso login --profile {answers.sso_profile}")
            print(f"  2. Use {auto} profile for all AWS commands:")
        else:
            print(f"  Use {auto} profile for all AWS commands:")
        print(f"     AWS_PROFILE={auto} aws sts get-caller-identity")
        print("\nCredentials will be automatically refreshed when needed.")

        if not self.options.force:
            print(f"\n{STATUS['INFO']} Note: Use --force to overwrite existing profiles and scripts.")

    def verify(self, answers: SetupAnswers) -> bool:
        print(f"\n{STATUS['INFO']} Validating setup...")
        success, message = validate_profile(answers.auto_credentials_profile)
        print(format_status(message, "SUCCESS" if success else "ERROR"))
        return success

    # Answer collection

    def collect_answers(self) -> SetupAnswers:
        """Work out the setup values from options, the config file and prompts."""
        options = self.options

        if options.oidc_provider:
            print(f"\n{STATUS['INFO']} OIDC provider specified: {options.oidc_provider}")
            self._require_oidc_support(options.oidc_provider)
            client_id = self._option_or_ask("--oidc-client-id", options.oidc_client_id,
                                            prompts.OIDC_CLIENT_ID)
            role_arn = self._option_or_ask("--role-arn", options.role_arn, prompts.ROLE_ARN)
            return SetupAnswers(
                prefix=self._ask(prompts.PREFIX),
                region=self._ask(prompts.REGION),
                oidc_provider=options.oidc_provider,
                oidc_client_id=client_id,
                role_arn=role_arn,
                use_oidc=True,
            )

        if options.manual_setup:
            print(f"\n{STATUS['INFO']} Manual setup mode selected. Skipping AWS SSO configuration.")
            if is_yes(self._ask(prompts.USE_OIDC)):
                return self._prompt_oidc()
            return self._prompt_manual_sso()

        document = load_config(self.store, self.settings.config_path)
        existing = find_sso_profiles(document)
        if len(document):
            print(f"\n{STATUS['INFO']} Reading AWS config file: {self.settings.config_path}")
            print(f"{STATUS['INFO']} Found {len(document)} sections in AWS config")
            print(f"{STATUS['INFO']} Found {len(existing)} SSO profiles")

        if is_yes(self._ask(prompts.USE_OIDC)):
            return self._prompt_oidc()

        discovered = None
        if existing:
            print(f"\n{STATUS['INFO']} Found existing AWS SSO profiles: {', '.join(existing)}")
            if is_yes(self._ask(prompts.USE_EXISTING)):
                name = self._ask(prompts.existing_profile_name(existing))
                return self._answers_from_existing(document, name)
            discovered = self._configure_new_sso_profile()
        else:
            print(f"\n{STATUS['INFO']} No existing AWS SSO profiles found.")
            discovered = self._configure_new_sso_profile()

        if discovered is not None:
            return discovered

        # Fall back to manual configuration
        return self._prompt_manual_sso()

    def _answers_from_existing(self, document, name: str) -> SetupAnswers:
        section = document[profile_header(name)]
        start_url = resolve_sso_start_url(document, name)
        if start_url:
            print(f"{STATUS['INFO']} Using SSO start URL: {start_url}")

        return SetupAnswers(
            prefix=name,
            region=section.get("region") or section.get("sso_region") or self._ask(prompts.REGION),
            sso_start_url=start_url or self._ask(prompts.SSO_START_URL),
            account_id=section.get("sso_account_id") or self._ask(prompts.ACCOUNT_ID),
            role_name=section.get("sso_role_name") or self._ask(prompts.ROLE_NAME),
        )

    def _configure_new_sso_profile(self) -> Optional[SetupAnswers]:
        """
        Run ``aws configure sso`` and pick up the profile it creates.

        Returns:
            Answers built from the new profile, or None to fall back to
            manual input
        """
        print(f"\n{STATUS['INFO']} Running 'aws configure sso'...")
        before = load_config(self.store, self.settings.config_path)

        try:
            run_aws_configure_sso()
        except ExternalProcessFailure as e:
            print(f"{STATUS['ERROR']} Failed to run aws configure sso: {e}")
            print(f"\n{STATUS['INFO']} Continuing with manual configuration...")
            return None

        print(f"\n{STATUS['SUCCESS']} AWS SSO configuration successful!")
        after = load_config(self.store, self.settings.config_path)
        if after == before:
            print(f"{STATUS['WARNING']} AWS config file has not changed after configuration")

        new_profiles = find_new_sso_profiles(before, after)
        if not new_profiles:
            print(f"{STATUS['WARNING']} No new SSO profiles found after configuration")
            return None

        name = new_profiles[0]
        print(f"{STATUS['INFO']} Using newly created profile '{name}' for auto-credentials setup")

        details = extract_profile_details(after, name)
        if details is None:
            print(f"{STATUS['WARNING']} Could not extract all required information from profile")
            return None

        start_url = details.sso_start_url
        if not start_url:
            print(f"{STATUS['WARNING']} Could not find SSO start URL in any profile")
            start_url = self._ask(prompts.SSO_START_URL)

        return SetupAnswers(
            prefix=details.prefix,
            region=details.region,
            sso_start_url=start_url,
            account_id=details.account_id,
            role_name=details.role_name,
        )

    def _prompt_oidc(self) -> SetupAnswers:
        provider = self._ask(prompts.OIDC_PROVIDER)
        self._require_oidc_support(provider)
        answers = prompt_multiple({
            "prefix": prompts.PREFIX,
            "region": prompts.REGION,
            "oidc_client_id": prompts.OIDC_CLIENT_ID,
            "role_arn": prompts.ROLE_ARN,
        }, self.input_func)
        return SetupAnswers(oidc_provider=provider, use_oidc=True, **answers)

    def _prompt_manual_sso(self) -> SetupAnswers:
        return SetupAnswers(**prompt_multiple(prompts.manual_sso_prompts(), self.input_func))

    def _require_oidc_support(self, provider: str) -> None:
        if provider.lower() not in SUPPORTED_OIDC_PROVIDERS:
            raise UnsupportedProviderError(provider)
        if not check_google_cloud_sdk():
            print(f"\n{STATUS['WARNING']} Google Cloud SDK (gcloud) is required for Google OIDC authentication.")
            raise MissingDependencyError("Google Cloud SDK (gcloud)", GCLOUD_INSTALL_URL)

    # Helpers

    def _ask(self, spec: prompts.PromptSpec) -> str:
        return prompt(spec, self.input_func)

    def _option_or_ask(self, option: str, value: Optional[str], spec: prompts.PromptSpec) -> str:
        """Use a command-line value if given, checked like the prompt would check it."""
        if not value:
            return self._ask(spec)
        error = spec.validate(value) if spec.validate else None
        if error is not None:
            raise InvalidOptionError(option, error)
        return value

    def _perform(self, description: str, operation: Callable[[], T]) -> T:
        print(f"{description}...")
        try:
            result = operation()
        except (ProfileExistsError, ScriptExistsError):
            raise
        except Exception:
            print(format_status(f"{description} failed", "ERROR"))
            raise
        print(format_status(f"{description} completed", "SUCCESS"))
        return result

    def _keep_existing(self, what: str, noun: str) -> None:
        print(f"{STATUS['WARNING']} {what} already exists.")
        print(f"{STATUS['INFO']} Use --force to overwrite existing {noun}s.")
        print(f"{STATUS['INFO']} Continuing with existing {noun}...")


def setup_command(options: SetupOptions, store: Optional[FileStore] = None,
                  settings: Optional[Settings] = None) -> SetupAnswers:
    """
    Run the setup wizard.

    Args:
        options: Parsed command-line options
        store: File access implementation (local disk by default)
        settings: Resolved paths (from the environment by default)

    Returns:
        The answers the setup was performed with
    """
    wizard = SetupWizard(options, store=store, settings=settings)
    return wizard.run()
