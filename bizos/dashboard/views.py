import logging
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from bizos.businesses.permissions import get_accessible_business
from bizos.accounting.summaries import ledger_totals, monthly_data
from bizos.crm.summaries import contact_totals
from .cache import get_cached_dashboard, set_cached_dashboard

logger = logging.getLogger('bizos.dashboard')

SEGMENT_COLORS = {
    'Customers': 'hsl(142, 76%, 36%)',
    'Leads': 'hsl(220, 91%, 52%)',
    'Prospects': 'hsl(25, 95%, 53%)',
}


def build_dashboard(business):
    """Combined KPIs for one business"""
    data = ledger_totals(business)
    contacts = contact_totals(business)
    data.update({
        'customer_count': contacts['customer_count'],
        'lead_count': contacts['lead_count'],
        'prospect_count': contacts['prospect_count'],
        'total_customer_value': contacts['total_value'],
        'document_count': business.documents.count(),
        'website_count': business.websites.count(),
        'group_count': business.chat_groups.count(),
        'image_count': business.generated_images.count(),
        'monthly_data': monthly_data(business),
        'customer_segments': [
            {'name': 'Customers', 'value': contacts['customer_count'], 'color': SEGMENT_COLORS['Customers']},
            {'name': 'Leads', 'value': contacts['lead_count'], 'color': SEGMENT_COLORS['Leads']},
            {'name': 'Prospects', 'value': contacts['prospect_count'], 'color': SEGMENT_COLORS['Prospects']},
        ],
    })
    return data


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard_kpis(request, business_id):
    """Dashboard KPIs of a business, served from cache when fresh"""
    business = get_accessible_business(request, business_id)

    data = get_cached_dashboard(business.id)
    if data is None:
        data = build_dashboard(business)
        set_cached_dashboard(business.id, data)
    return Response(data)
