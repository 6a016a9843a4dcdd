from django.contrib import messages
from django.contrib.auth import login, logout
from django.contrib.auth.forms import AuthenticationForm
from django.http import Http404
from django.urls import reverse, reverse_lazy
from django.utils.http import url_has_allowed_host_and_scheme
from django.views.generic import DetailView, FormView, RedirectView, TemplateView

from ..forms import RegisterForm
from ..models import Studio
from ..services.studio import StudioCatalogService, StudioDetailService


class HomeView(RedirectView):
    """Send each role to its landing page."""

    def get_redirect_url(self, *args, **kwargs):
        user = self.request.user
        if user.is_authenticated:
            return reverse(user.default_page())
        return reverse("studio_list")


class LoginView(FormView):
    template_name = "auth/login.html"
    form_class = AuthenticationForm

    def get_form_kwargs(self):
        kwargs = super().get_form_kwargs()
        kwargs["request"] = self.request
        return kwargs

    def get_success_url(self):
        redirect_to = self.request.POST.get("next") or self.request.GET.get("next")
        if redirect_to and url_has_allowed_host_and_scheme(redirect_to, allowed_hosts={self.request.get_host()}):
            return redirect_to
        return reverse(self.request.user.default_page())

    def form_valid(self, form):
        login(self.request, form.get_user())
        return super().form_valid(form)

    def form_invalid(self, form):
        messages.error(self.request, "Invalid username or password.")
        return self.render_to_response(self.get_context_data(form=form))


class LogoutView(RedirectView):
    pattern_name = "login"

    def get(self, request, *args, **kwargs):
        logout(request)
        return super().get(request, *args, **kwargs)

    def post(self, request, *args, **kwargs):
        logout(request)
        return super().get(request, *args, **kwargs)


class RegisterView(FormView):
    template_name = "auth/register.html"
    form_class = RegisterForm
    success_url = reverse_lazy("login")

    def form_valid(self, form):
        form.save()
        messages.success(self.request, "Registration successful. Please log in.")
        return super().form_valid(form)

    def form_invalid(self, form):
        messages.error(self.request, "Please correct the highlighted errors.")
        return self.render_to_response(self.get_context_data(form=form))


class StudioListView(TemplateView):
    template_name = "studios/list.html"
    catalog_service_class = StudioCatalogService

    def get_catalog_service(self) -> StudioCatalogService:
        return self.catalog_service_class()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        service = self.get_catalog_service()
        filters = service.build_filters(self.request.GET)
        context.update(
            {
                "studios": service.get_catalog(filters),
                "cities": service.available_cities(),
                "search_term": filters.search,
                "selected_city": filters.city,
            }
        )
        return context


class StudioDetailView(DetailView):
    template_name = "studios/detail.html"
    model = Studio
    context_object_name = "studio"
    service_class = StudioDetailService

    def get_object(self, queryset=None):
        studio = super().get_object(queryset)
        if not self.service_class.can_view(studio, self.request.user):
            raise Http404("Studio not found")
        return studio

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context.update(self.service_class(self.object).build_context())
        return context
