from django import forms

from authentication.domain.services import MIN_PASSWORD_LENGTH

AUTH_MODES = (("login", "Sign In"), ("signup", "Sign Up"))


class AuthForm(forms.Form):
    """Shared sign-in / sign-up form; ``mode`` selects the flow."""

    mode = forms.ChoiceField(choices=AUTH_MODES, initial="login", widget=forms.HiddenInput)
    email = forms.EmailField(widget=forms.EmailInput(attrs={"placeholder": "Email", "autocomplete": "email"}))
    password = forms.CharField(
        min_length=MIN_PASSWORD_LENGTH,
        widget=forms.PasswordInput(attrs={"placeholder": "Password", "minlength": MIN_PASSWORD_LENGTH}),
    )
