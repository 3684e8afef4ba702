from django.http import HttpResponseNotAllowed


def by_method(**handlers):
    '''
    Builds a single async view out of per-method handlers, e.g.
    ``by_method(get=book_create_get, post=book_create_post)``.
    '''
    if 'get' in handlers:
        handlers.setdefault('head', handlers['get'])
    allowed = [method.upper() for method in handlers]

    async def view(request, *args, **kwargs):
        handler = handlers.get(request.method.lower())
        if handler is None:
            return HttpResponseNotAllowed(allowed)
        return await handler(request, *args, **kwargs)

    return view


def selected(ids) -> set:
    '''
    Ids as strings, for marking chosen options in a form.
    '''
    return {str(x) for x in ids if x is not None}
