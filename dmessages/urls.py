from django.urls import path
from .views import SendDirectMessageView, SendQuotationMessageView, SendVendorMessageView

app_name = 'dmessages'

urlpatterns = [
    path('send/', SendQuotationMessageView.as_view(), name='send-quotation'),
    path('send-vendor/', SendVendorMessageView.as_view(), name='send-vendor'),
    path('send-direct/', SendDirectMessageView.as_view(), name='send-direct'),
]
