from kanban.models import Task


def column_titles(column):
    return list(Task.objects.filter(column=column).order_by('order').values_list('title', flat=True))


def column_orders(column):
    return list(Task.objects.filter(column=column).order_by('order').values_list('order', flat=True))
