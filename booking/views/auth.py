"""
Session login, registration and logout pages.
"""
from django.contrib.auth import login as auth_login, logout as auth_logout
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_http_methods
from rest_framework.exceptions import ValidationError
from rest_framework.throttling import ScopedRateThrottle

from booking.exceptions import Conflict, error_message
from booking.serializers.auth import LoginSerializer, RegisterSerializer
from booking.services import accounts


def index(request):
    return redirect('/login')


def _throttled(request):
    """Rendered login page when the client exceeded the ``login`` rate, else None."""
    throttle = ScopedRateThrottle()
    if throttle.allow_request(request, login_page):
        return None
    response = render(request, 'booking/login.html', {
        'warning': 'Too many login attempts. Please try again later.',
        'username': request.POST.get('username', ''),
    }, status=429)
    wait = throttle.wait()
    if wait is not None:
        response['Retry-After'] = str(int(wait) + 1)
    return response


@require_http_methods(['GET', 'POST'])
def login_page(request):
    if request.method == 'GET':
        return render(request, 'booking/login.html')
    throttled = _throttled(request)
    if throttled is not None:
        return throttled
    s = LoginSerializer(data=request.POST)
    user = None
    if s.is_valid():
        user = accounts.check_credentials(request, s.validated_data['username'], s.validated_data['password'])
    if user is None:
        return render(request, 'booking/login.html', {
            'warning': 'Invalid username or password.',
            'username': request.POST.get('username', ''),
        })
    auth_login(request, user)
    return redirect(accounts.landing_url(user.role))


# ScopedRateThrottle reads throttle_scope off the view
login_page.throttle_scope = 'login'


@require_http_methods(['GET', 'POST'])
def register_page(request):
    ctx = {'hospitals': accounts.unclaimed_hospitals()}
    if request.method == 'GET':
        return render(request, 'booking/register.html', ctx)
    ctx['form'] = {k: request.POST.get(k, '') for k in ('username', 'email', 'role', 'hospital_id')}
    s = RegisterSerializer(data=request.POST)
    if not s.is_valid():
        ctx['warning'] = error_message(ValidationError(s.errors))
        return render(request, 'booking/register.html', ctx, status=400)
    try:
        accounts.register(**s.validated_data)
    except Conflict as e:
        ctx['warning'] = error_message(e)
        return render(request, 'booking/register.html', ctx)
    except ValidationError as e:
        ctx['warning'] = error_message(e)
        return render(request, 'booking/register.html', ctx, status=400)
    return redirect('/login')


@require_GET
def logout_page(request):
    auth_logout(request)
    return redirect('/login')
