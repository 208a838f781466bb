from django.urls import path
from . import views, views_import

app_name = 'congregations'

urlpatterns = [
    # Member bulk import (before members/<pk> so "import" is not read as an id)
    path('members/import', views_import.import_members, name='member_import'),
    path('members/import/template', views_import.download_template, name='member_import_template'),

    # Name lookups
    path('lookups/<slug:collection>', views.lookup_view, name='lookups'),

    # Temples
    path('temples', views.collection_view, {'collection': 'temples'}, name='temple_list'),
    path('temples/<str:pk>', views.detail_view, {'collection': 'temples'}, name='temple_detail'),
    path('temples/<str:pk>/assign-pastor', views.assign_view,
         {'collection': 'temples', 'target': 'pastor'}, name='temple_assign_pastor'),

    # Pastors
    path('pastors', views.collection_view, {'collection': 'pastors'}, name='pastor_list'),
    path('pastors/<str:pk>', views.detail_view, {'collection': 'pastors'}, name='pastor_detail'),
    path('pastors/<str:pk>/assign-temple', views.assign_view,
         {'collection': 'pastors', 'target': 'temple'}, name='pastor_assign_temple'),

    # Members
    path('members', views.collection_view, {'collection': 'members'}, name='member_list'),
    path('members/<str:pk>', views.detail_view, {'collection': 'members'}, name='member_detail'),
    path('members/<str:pk>/assign-temple', views.assign_view,
         {'collection': 'members', 'target': 'temple'}, name='member_assign_temple'),

    # Committees
    path('committees', views.collection_view, {'collection': 'committees'}, name='committee_list'),
    path('committees/<str:pk>', views.detail_view, {'collection': 'committees'}, name='committee_detail'),
    path('committees/<str:pk>/assign-leader', views.assign_view,
         {'collection': 'committees', 'target': 'leader'}, name='committee_assign_leader'),
    path('committees/<str:pk>/assign-temple', views.assign_view,
         {'collection': 'committees', 'target': 'temple'}, name='committee_assign_temple'),
]
