"""
Decorators
-------------------------
"""
from functools import wraps
from inspect import isawaitable

from aiohttp import web
from aiohttp.web_urldispatcher import View

from ridegate.serializer import JSendSchema, jsend


def match_getter(getter_function, injection_parameter: str, **match_map: str):
    """
    Automatically fetches and includes an item, or 404's if it doesn't exist.

    .. code-block:: python

        # example usage
        @match_getter(get_ride, 'ride', ride_id='id')
        async def get(self, ride: Ride)
            return web.json_response(data=ride.serialize())

    :param getter_function: The function to fetch the item from.
    :param injection_parameter: The name of the parameter to pass the object as.
    :param match_map: Associates a kwarg on the ``getter_function`` to an integer url variable.
    :return: A decorator that wraps the response and passes in the object.
    """

    def attach_instance(original_function):

        @wraps(original_function)
        async def new_func(self: View, **kwargs):
            params = {}
            errors = []
            for key, url_variable in match_map.items():
                param = self.request.match_info.get(url_variable)
                try:
                    params[key] = int(param)
                except (ValueError, TypeError):
                    errors.append(f'Could not convert url parameter "{param}" to expected type int.')

            if errors:
                response = jsend.fail("Errors with your request.", errors=errors)
                raise web.HTTPBadRequest(text=JSendSchema().dumps(response), content_type='application/json')

            item = getter_function(**params)
            if isawaitable(item):
                item = await item

            if item is None:
                response = jsend.fail(f"Could not find {injection_parameter} with the given params.", params=params)
                raise web.HTTPNotFound(text=JSendSchema().dumps(response), content_type='application/json')

            return await original_function(self, **kwargs, **{injection_parameter: item})

        return new_func

    return attach_instance
