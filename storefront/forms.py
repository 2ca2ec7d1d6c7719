from django import forms

from storefront.domain.models import SIZES

SIZE_CHOICES = [(size, size) for size in SIZES]


class AddToCartForm(forms.Form):
    size = forms.ChoiceField(
        choices=SIZE_CHOICES,
        widget=forms.RadioSelect,
        error_messages={"required": "Please select a size", "invalid_choice": "Please select a size"},
    )
    quantity = forms.IntegerField(min_value=1, initial=1, required=False)

    def clean_quantity(self):
        return self.cleaned_data.get("quantity") or 1


class CartLineForm(forms.Form):
    """Identifies a cart line for update/remove; quantity only matters for updates."""

    product_id = forms.CharField(widget=forms.HiddenInput)
    size = forms.ChoiceField(choices=SIZE_CHOICES, required=False, widget=forms.HiddenInput)
    quantity = forms.IntegerField(min_value=1, required=False)


class ContactForm(forms.Form):
    name = forms.CharField(max_length=120)
    email = forms.EmailField()
    location = forms.CharField(max_length=120, required=False)
    message = forms.CharField(widget=forms.Textarea(attrs={"rows": 5}), max_length=5000)
