from django.contrib import admin
from .models import AdRequest, Advertisement, Quotation, ServiceRequest, VendorConnection


@admin.register(ServiceRequest)
class ServiceRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'customer', 'category', 'status', 'created_at']
    list_filter = ['status', 'category']
    search_fields = ['id', 'title', 'customer__name']


@admin.register(Quotation)
class QuotationAdmin(admin.ModelAdmin):
    list_display = ['id', 'service_request', 'vendor', 'customer', 'price', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['id', 'vendor__business_name', 'customer__name']
    list_select_related = ['service_request', 'vendor', 'customer']


@admin.register(Advertisement)
class AdvertisementAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'vendor', 'category', 'status']
    list_filter = ['status', 'category']
    search_fields = ['id', 'title']


@admin.register(AdRequest)
class AdRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'advertisement', 'customer', 'vendor', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['id', 'customer__name', 'vendor__business_name']


@admin.register(VendorConnection)
class VendorConnectionAdmin(admin.ModelAdmin):
    list_display = ['id', 'requester', 'receiver', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['id', 'requester__business_name', 'receiver__business_name']
