from backoffice.domain.auth.model.identity import Identity
from backoffice.domain.auth.model.session import SessionToken
from backoffice.domain.auth.port.user_directory import UserDirectory
from backoffice.domain.auth.service.authorization import AuthorizationEvaluator
from backoffice.domain.auth.service.session import SessionService
from backoffice.domain.shared.authorization.gate import authenticated, public
from backoffice.domain.shared.command import Command, CommandHandler, Result
from backoffice.domain.shared.error import AuthorizationError


class Login(Command):
    token: str
    email: str
    password: str


class LoggedIn(Result):
    user_id: str
    role: str | None
    role_known: bool


class Logout(Command):
    pass


class LoggedOut(Result):
    ended: bool


class LoginHandler(CommandHandler[Login, LoggedIn]):
    """Checks credentials against the user directory and starts a session.

    The role always comes from the directory, never from the caller.
    """

    __auth__ = public()
    identity: Identity
    authz: AuthorizationEvaluator
    session_service: SessionService
    user_directory: UserDirectory

    async def run(self, cmd: Login) -> LoggedIn:
        user = await self.user_directory.authenticate(cmd.email, cmd.password)
        if user is None:
            raise AuthorizationError("Invalid email or password", code="invalid_credentials")

        actor = user.to_actor()
        await self.session_service.login(actor, cmd.token)
        return LoggedIn(
            user_id=actor.id,
            role=actor.role,
            role_known=self.authz.resolve_role(actor) is not None,
        )


class LogoutHandler(CommandHandler[Logout, LoggedOut]):
    """Ends the caller's own session."""

    __auth__ = authenticated()
    identity: Identity
    authz: AuthorizationEvaluator
    session_service: SessionService
    token: SessionToken

    async def run(self, cmd: Logout) -> LoggedOut:
        return LoggedOut(ended=await self.session_service.logout(self.token))
