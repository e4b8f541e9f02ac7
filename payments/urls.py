from django.urls import path

from .views import AdminPaymentListView, AdminPaymentUpdateView, PaymentListCreateView

urlpatterns = [
    path("payments", PaymentListCreateView.as_view(), name="payments"),
    path("admin/payments", AdminPaymentListView.as_view(), name="admin-payments"),
    path("admin/payments/<int:pk>", AdminPaymentUpdateView.as_view(), name="admin-payment-update"),
]
