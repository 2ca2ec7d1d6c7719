import logging

from django.contrib import messages
from django.shortcuts import redirect, render
from django.views import View
from django.views.generic import TemplateView

from storefront.forms import ContactForm
from utils.logging_utils import mask_value

logger = logging.getLogger(__name__)


class AboutView(TemplateView):
    template_name = "storefront/about.html"


class ContactView(View):
    template_name = "storefront/contact.html"

    def get(self, request):
        return render(request, self.template_name, {"form": ContactForm()})

    def post(self, request):
        form = ContactForm(request.POST)
        if not form.is_valid():
            return render(request, self.template_name, {"form": form}, status=400)

        data = form.cleaned_data
        logger.info(
            f"Contact message from {data['name']} <{mask_value(data['email'])}> "
            f"({data['location'] or 'no location'}): {len(data['message'])} chars"
        )
        messages.success(request, "Thank you for your message! We'll get back to you soon.")
        return redirect("storefront:contact")
