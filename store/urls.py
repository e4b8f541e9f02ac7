from django.urls import path

from . import views, views_admin, views_catalog
from .auth_views import LoginView, LogoutView, RegisterView
from .views_kyc import KYCView
from rest_framework_simplejwt.views import TokenRefreshView

urlpatterns = [
    path("health", views.health),

    # auth
    path("auth/register", RegisterView.as_view(), name="register"),
    path("auth/login", LoginView.as_view(), name="login"),
    path("auth/logout", LogoutView.as_view(), name="logout"),
    path("auth/refresh", TokenRefreshView.as_view(), name="refresh"),

    # user
    path("user/profile", views.ProfileView.as_view(), name="profile"),
    path("user/activities", views.ActivityListView.as_view(), name="activities"),
    path("user/referrals", views.ReferralListView.as_view(), name="referrals"),
    path("user/products", views_catalog.MyProductListView.as_view(), name="my-products"),

    # storefront
    path("phone-numbers", views.AvailablePhoneNumberListView.as_view(), name="phone-numbers"),
    path("orders", views.OrderListCreateView.as_view(), name="orders"),
    path("orders/<int:pk>", views.OrderDetailView.as_view(), name="order-detail"),
    path("kyc", KYCView.as_view(), name="kyc"),
    path("ai-chat", views.AiChatView.as_view(), name="ai-chat"),

    # catalog
    path("services", views_catalog.ServiceListView.as_view(), name="services"),
    path("services/<int:pk>", views_catalog.ServiceDetailView.as_view(), name="service-detail"),
    path("countries", views_catalog.CountryListView.as_view(), name="countries"),
    path("countries/<int:pk>", views_catalog.CountryDetailView.as_view(), name="country-detail"),
    path("products", views_catalog.ProductListCreateView.as_view(), name="products"),
    path("products/<int:pk>", views_catalog.ProductDetailView.as_view(), name="product-detail"),

    # back office
    path("admin/users", views_admin.AdminUserListView.as_view(), name="admin-users"),
    path("admin/users/<int:pk>", views_admin.AdminUserUpdateView.as_view(), name="admin-user-update"),
    path("admin/phone-numbers", views_admin.AdminPhoneNumberListCreateView.as_view(), name="admin-phone-numbers"),
    path("admin/phone-numbers/<int:pk>", views_admin.AdminPhoneNumberDetailView.as_view(), name="admin-phone-number"),
    path("admin/orders", views_admin.AdminOrderListView.as_view(), name="admin-orders"),
    path("admin/orders/<int:pk>", views_admin.AdminOrderUpdateView.as_view(), name="admin-order-update"),
    path("admin/kyc", views_admin.AdminKYCListView.as_view(), name="admin-kyc"),
    path("admin/kyc/<int:pk>", views_admin.AdminKYCUpdateView.as_view(), name="admin-kyc-update"),
    path("admin/products", views_admin.AdminProductListView.as_view(), name="admin-products"),
    path("admin/products/<int:pk>", views_admin.AdminProductUpdateView.as_view(), name="admin-product-update"),
    path("admin/services", views_admin.AdminServiceListCreateView.as_view(), name="admin-services"),
    path("admin/services/<int:pk>", views_admin.AdminServiceUpdateView.as_view(), name="admin-service-update"),
    path("admin/countries", views_admin.AdminCountryListCreateView.as_view(), name="admin-countries"),
    path("admin/countries/<int:pk>", views_admin.AdminCountryUpdateView.as_view(), name="admin-country-update"),
    path("admin/settings", views_admin.AdminSettingsView.as_view(), name="admin-settings"),
    path("admin/broadcast", views_admin.AdminBroadcastView.as_view(), name="admin-broadcast"),
]
