from abc import ABC


class Model(ABC):
    def validate(self):
        pass

    def model_dump(self):
        return dict(vars(self))

    def __str__(self):
        return str(vars(self))
