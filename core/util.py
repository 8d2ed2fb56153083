import math
from datetime import date
from decimal import Decimal

from django.contrib.contenttypes.models import ContentType
from django.urls import reverse
from django.utils.html import format_html


def linkify(field_name):
    def _linkify(obj):
        linked_obj = getattr(obj, field_name)
        if linked_obj is None:
            return "-"
        linked_content_type = ContentType.objects.get_for_model(linked_obj)
        model_name = linked_content_type.model
        view_name = f"admin:{linked_content_type.app_label}_{model_name}_change"
        link_url = reverse(view_name, args=[linked_obj.pk])
        return format_html('<a href="{}">{}</a>', link_url, linked_obj)

    _linkify.short_description = field_name.replace("_", " ").capitalize()
    return _linkify


def current_season():
    today = date.today()
    return today.year


def to_decimal(value):
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(n, decimals=0):
    """Round halves up (12.5 -> 13, -2.5 -> -2) rather than to even."""
    multiplier = Decimal(10) ** decimals
    rounded = Decimal(math.floor(to_decimal(n) * multiplier + Decimal("0.5"))) / multiplier
    if decimals == 0:
        return int(rounded)
    return rounded
