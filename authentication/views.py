"""Sign-in / sign-up page and sign-out for the HTML storefront."""

import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme
from django.views import View
from django.views.decorators.http import require_POST

from authentication.forms import AuthForm
from authentication.session import login_session, logout_session
from infrastructure.container import container
from storefront.services.base import ErrorCodes

logger = logging.getLogger(__name__)


def _failure_status(result):
    return 502 if result.error_code == ErrorCodes.BACKEND_ERROR else 400


def _safe_next(request, default="storefront:home"):
    target = request.POST.get("next") or request.GET.get("next")
    if target and url_has_allowed_host_and_scheme(target, allowed_hosts={request.get_host()}):
        return target
    return default


class AuthPageView(View):
    """Sign in by default; ``?mode=signup`` toggles to account creation."""

    template_name = "authentication/auth.html"

    def _render(self, request, form, mode, status=200):
        context = {"form": form, "mode": mode, "next": request.POST.get("next") or request.GET.get("next", "")}
        return render(request, self.template_name, context, status=status)

    def get(self, request):
        mode = "signup" if request.GET.get("mode") == "signup" else "login"
        return self._render(request, AuthForm(initial={"mode": mode}), mode)

    def post(self, request):
        form = AuthForm(request.POST)
        mode = request.POST.get("mode") if request.POST.get("mode") in ("login", "signup") else "login"
        if not form.is_valid():
            return self._render(request, form, mode, status=400)

        service = container.auth_service()
        email = form.cleaned_data["email"]
        password = form.cleaned_data["password"]

        if mode == "login":
            result = service.sign_in(email, password)
            if not result.success:
                form.add_error(None, result.error)
                return self._render(request, form, mode, status=_failure_status(result))
            login_session(request, result.user)
            messages.success(request, result.message)
            return redirect(_safe_next(request))

        result = service.sign_up(email, password)
        if not result.success:
            for field, error in (result.errors or {}).items():
                form.add_error(field if field in form.fields else None, error)
            if not result.errors:
                form.add_error(None, result.error)
            return self._render(request, form, mode, status=_failure_status(result))

        messages.success(request, result.message)
        if result.requires_confirmation:
            return self._render(request, AuthForm(initial={"mode": "login"}), "login")

        login_session(request, result.user)
        return redirect(_safe_next(request))


@require_POST
def logout_view(request):
    if request.user.is_authenticated:
        container.auth_service().sign_out(request.user)
    logout_session(request)
    messages.info(request, "You have been signed out.")
    return redirect("storefront:home")
